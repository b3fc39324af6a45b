"""Prompt templates for the build pipeline steps.

Each role maps to a template function taking a ``BuildContext``; the
registry keeps prompt construction separate from the steps that send it.
"""

from collections.abc import Callable
from dataclasses import dataclass

LANGUAGE_NAMES = {"ar": "Arabic", "en": "English", "fr": "French", "es": "Spanish"}

CONTENT_RULES = """CRITICAL - CONTENT:
- Write real, detailed, realistic content (100% concrete)
- Placeholders and dummy examples are strictly forbidden
- Never write "Example 1", "Site 1", "Article 1" or "Item 1"
- Use real names and realistic facts that fit the idea
- If the idea is about websites, name real existing websites
- If it is about products, name real products; if about people, real people
- Write rich, complete content without abbreviations
- Every heading, paragraph and description must be fully written"""

HTML_TEMPLATE = """You are an agent specialized in writing modern, creative HTML. Write modern, well-organized HTML5 for the given idea:

- Use modern HTML5 in {language_name} (lang="{language}" dir="{direction}")
- Add SEO-friendly meta tags
- Use semantic HTML (header, main, section, article, footer)
- Add data attributes for interactive elements
- Keep a clear structure that is easy to style and script
- Add descriptive classes to important elements

{content_rules}

Idea: {idea}

Return only the code, without explanations or comments."""

CSS_TEMPLATE = """You are an agent specialized in creative, modern CSS. Write professional, distinctive CSS for the given HTML:

CRITICAL CSS REQUIREMENTS:
- Very modern design with harmonious, attractive colors
- Distinctive gradients (linear-gradient, radial-gradient)
- Layered shadows for depth (box-shadow, text-shadow)
- Smooth animations and transitions on every interactive element
- Modern CSS features (backdrop-filter, clip-path, transform)
- Distinctive hover effects (scale, rotate, color changes)
- @keyframes animations for important elements
- Smooth scrolling and scroll animations
- CSS Grid and Flexbox for layout
- Full {direction_upper} and {language_name} support
- Fully responsive design
- CSS variables for colors and repeated values

Expected animations: fade-in on appear, slide-in from the sides, pulse and bounce for buttons, animated background gradients, hover transformations.

CRITICAL - CONTENT:
- Design around the real content present in the HTML
- Do not use generic colors; pick colors that fit the actual content

HTML:
{html}

Idea: {idea}

Return only the code, without explanations or comments."""

JS_TEMPLATE = """You are an agent specialized in modern, interactive JavaScript. Write distinctive JavaScript that adds strong interactivity to the site:

CRITICAL JS REQUIREMENTS:
- Modern ES6+ (const, let, arrow functions, async/await)
- Smooth, dynamic interactions for every element
- Intersection Observer for scroll animations
- Smooth scrolling for in-page links
- Event delegation for performance
- Loading states and transitions between states
- requestAnimationFrame for smooth animation
- Parallax effects where appropriate
- localStorage to remember preferences where possible
- Keyboard navigation support
- Form validation with clear messages
- Dynamic content loading and smooth page transitions

CRITICAL - CONTENT:
- Any dynamic data in JS (arrays, objects) must hold real content
- "Item 1" or "Example 1" in data is forbidden
- Write realistic data that fits the idea

HTML:
{html}

CSS:
{css}

Idea: {idea}

Return only the code, without explanations or comments."""

REVIEW_TEMPLATE = """You are an agent specialized in reviewing and improving code. Review and improve the following code:

REVIEW CHECKLIST:
- Make sure there are enough animations and transitions
- Check design quality, colors and gradients
- Make sure hover effects are distinctive
- Review the JavaScript for strong interactivity
- Add any missing animation or interaction
- Improve performance (use transform instead of position for animation)
- Ensure accessibility and semantic HTML
- Review the responsive design
- Ensure {direction_upper} support
- Fix any bugs in the code
- Improve structure and readability

CRITICAL - CONTENT:
- Make sure all content is real and not a placeholder
- Replace any "Example 1", "Site 1" or other placeholder with real content
- Write realistic, detailed content that fits the idea

HTML:
{html}

CSS:
{css}

JavaScript:
{js}

Return the improved code as JSON only, without any explanation or comments:
{{"html": "...", "css": "...", "js": "..."}}"""


@dataclass(frozen=True)
class BuildContext:
    """Everything a template may reference: the idea and prior artifacts."""

    idea: str
    html: str = ""
    css: str = ""
    js: str = ""
    language: str = "ar"
    direction: str = "rtl"

    @property
    def language_name(self) -> str:
        return LANGUAGE_NAMES.get(self.language, self.language)

    def as_format_kwargs(self) -> dict[str, str]:
        return {
            "idea": self.idea,
            "html": self.html,
            "css": self.css,
            "js": self.js,
            "language": self.language,
            "language_name": self.language_name,
            "direction": self.direction,
            "direction_upper": self.direction.upper(),
            "content_rules": CONTENT_RULES,
        }


PromptTemplate = Callable[[BuildContext], str]


def _from_text(template: str) -> PromptTemplate:
    def render(context: BuildContext) -> str:
        return template.format(**context.as_format_kwargs())

    return render


class PromptRegistry:
    """Role name -> template function."""

    def __init__(self) -> None:
        self._templates: dict[str, PromptTemplate] = {}

    def register(self, role: str, template: PromptTemplate) -> None:
        self._templates[role] = template

    def roles(self) -> list[str]:
        return sorted(self._templates)

    def render(self, role: str, context: BuildContext) -> str:
        """Render the prompt for ``role``.

        Raises:
            KeyError: If no template is registered for the role
        """
        try:
            template = self._templates[role]
        except KeyError:
            raise KeyError(f"No prompt template registered for role '{role}'") from None
        return template(context)


def default_registry() -> PromptRegistry:
    """Registry with the built-in html, css, js and review templates."""
    registry = PromptRegistry()
    registry.register("html", _from_text(HTML_TEMPLATE))
    registry.register("css", _from_text(CSS_TEMPLATE))
    registry.register("js", _from_text(JS_TEMPLATE))
    registry.register("review", _from_text(REVIEW_TEMPLATE))
    return registry
