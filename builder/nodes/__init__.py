"""Build pipeline steps."""

from .base import AgentStep, CreativeStep, log_step_execution
from .css_agent import CssAgent
from .html_agent import HtmlAgent
from .js_agent import JsAgent
from .publish_agent import PublishAgent
from .review_agent import ReviewAgent

__all__ = [
    "AgentStep",
    "CreativeStep",
    "CssAgent",
    "HtmlAgent",
    "JsAgent",
    "PublishAgent",
    "ReviewAgent",
    "log_step_execution",
]
