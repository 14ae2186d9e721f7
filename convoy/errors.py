"""Convoy exception hierarchy.

Subscriber metadata operations never raise; these cover template loading and
rendering, which callers must propagate rather than send partial text.
"""


class ConvoyError(Exception):
    """Base class for all convoy errors."""
    pass

class TemplateError(ConvoyError):
    """Base class for template failures."""
    pass

class TemplateLoadError(TemplateError):
    """Template directory missing or a template failed to parse."""
    pass

class TemplateNotFoundError(TemplateError):
    """No template with the requested name."""
    pass

class TemplateRenderError(TemplateError):
    """Template referenced a field the data does not provide."""
    pass
