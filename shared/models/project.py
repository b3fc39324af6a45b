"""Project model."""

from enum import Enum
import uuid

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class BuildStatus(str, Enum):
    """AI build pipeline status, stored in ``ai_agents_status``.

    Forward-only: html_agent -> css_agent -> js_agent -> review_agent
    -> publish_agent -> completed. A failed run keeps its last status.
    """

    HTML_AGENT = "html_agent"
    CSS_AGENT = "css_agent"
    JS_AGENT = "js_agent"
    REVIEW_AGENT = "review_agent"
    PUBLISH_AGENT = "publish_agent"
    COMPLETED = "completed"


class Project(Base):
    """Project model - one playground site (or one subpage of a site)."""

    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("parent_project_id", "subpage_route", name="uq_projects_parent_route"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id: Mapped[str] = mapped_column(String(36), index=True)
    project_name: Mapped[str] = mapped_column(String(255))
    custom_url: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)

    # Content artifacts
    html_code: Mapped[str] = mapped_column(Text, default="")
    css_code: Mapped[str] = mapped_column(Text, default="")
    js_code: Mapped[str] = mapped_column(Text, default="")

    # Build state
    ai_agents_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ai_agents_progress: Mapped[int] = mapped_column(Integer, default=0)
    ai_agents_idea: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Append-only list of {agent, message, timestamp}
    agent_messages: Mapped[list] = mapped_column(JSON, default=list)

    # Publication
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    show_in_community: Mapped[bool] = mapped_column(Boolean, default=False)

    # Subpage linkage
    parent_project_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True
    )
    is_subpage: Mapped[bool] = mapped_column(Boolean, default=False)
    subpage_route: Mapped[str | None] = mapped_column(String(512), nullable=True)
