"""CSS step: a stylesheet matching the generated markup."""

from shared.models import BuildStatus

from .base import CreativeStep


class CssAgent(CreativeStep):
    name = "css_agent"
    agent_name = "CSS Agent"
    status = BuildStatus.CSS_AGENT
    role = "css"
    start_message = "Designing the styles and animations"
    done_message = "Styles are ready, handing over to the JavaScript agent"
