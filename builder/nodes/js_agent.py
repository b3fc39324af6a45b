"""JavaScript step: interactivity on top of the markup and styles."""

from shared.models import BuildStatus

from .base import CreativeStep


class JsAgent(CreativeStep):
    name = "js_agent"
    agent_name = "JS Agent"
    status = BuildStatus.JS_AGENT
    role = "js"
    start_message = "Adding interactivity"
    done_message = "Interactivity is ready, sending everything for review"
