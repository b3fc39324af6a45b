"""HTML step: the page structure for the idea."""

from shared.models import BuildStatus

from .base import CreativeStep


class HtmlAgent(CreativeStep):
    name = "html_agent"
    agent_name = "HTML Agent"
    status = BuildStatus.HTML_AGENT
    role = "html"
    start_message = "Started building the page structure"
    done_message = "HTML is ready, handing over to the CSS agent"
