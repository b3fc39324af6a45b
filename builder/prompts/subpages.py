"""Subpage classification and prompts.

Routes are classified by keyword (English and Arabic slugs) into a page
kind, each with its own content requirements.
"""

from dataclasses import dataclass
from enum import Enum
from html import escape


class PageKind(str, Enum):
    ARTICLE = "article"
    ABOUT = "about"
    CONTACT = "contact"
    PRIVACY = "privacy"
    TERMS = "terms"
    FAQ = "faq"
    GENERIC = "generic"


@dataclass(frozen=True)
class PageTemplate:
    """Keywords that select a kind, and what a page of that kind must contain."""

    kind: PageKind
    keywords: tuple[str, ...]
    requirements: str
    min_words: int


# Classification order matters: the first template with a matching keyword wins
PAGE_TEMPLATES: tuple[PageTemplate, ...] = (
    PageTemplate(
        kind=PageKind.ARTICLE,
        keywords=("article", "مقال", "blog"),
        requirements=(
            'Write a complete article titled "{page_name}" with: an introduction (150+ words), '
            "4-5 sections, 1000+ words of content, lists, quotations, a conclusion, "
            "author information and links to related articles."
        ),
        min_words=1000,
    ),
    PageTemplate(
        kind=PageKind.ABOUT,
        keywords=("about", "من-نحن"),
        requirements=(
            'Create an "About us" page with: vision and mission, founding story, values (5-7), '
            "team (4-6 members), achievements, goals, testimonials (3-5) and a timeline."
        ),
        min_words=500,
    ),
    PageTemplate(
        kind=PageKind.CONTACT,
        keywords=("contact", "اتصل"),
        requirements=(
            "Create a contact page with: a complete HTML form, contact details, address, "
            "map, opening hours and an FAQ (3-5 questions)."
        ),
        min_words=500,
    ),
    PageTemplate(
        kind=PageKind.PRIVACY,
        keywords=("privacy", "خصوصية"),
        requirements=(
            "Create a comprehensive privacy policy covering: introduction, data collected, "
            "use of data, user rights, cookies, third parties, security, retention and updates."
        ),
        min_words=500,
    ),
    PageTemplate(
        kind=PageKind.TERMS,
        keywords=("terms", "شروط"),
        requirements=(
            "Create terms of use covering: introduction, definitions, permitted and prohibited use, "
            "intellectual property, accounts, disclaimer and governing law."
        ),
        min_words=500,
    ),
    PageTemplate(
        kind=PageKind.FAQ,
        keywords=("faq", "أسئلة"),
        requirements=(
            "Create an FAQ page with: 12-20 detailed questions and answers, categories "
            "(general, technical, accounts, payments), an accordion and a "
            '"Didn\'t find your answer?" form.'
        ),
        min_words=500,
    ),
)

GENERIC_TEMPLATE = PageTemplate(
    kind=PageKind.GENERIC,
    keywords=(),
    requirements=(
        'Create a comprehensive "{page_name}" page: 800+ words of content, '
        "organized headings, lists and examples."
    ),
    min_words=500,
)

SUBPAGE_SYSTEM_PROMPT = (
    "You are an expert in professional {language_name} web pages. "
    "Long, detailed content. HTML only, without markdown."
)

SUBPAGE_TEMPLATE = """You are a web development expert. Create a complete, very detailed HTML page.

**Project:** {idea}
**Page:** {page_name} ({route})

**Context:**
{context}

**Required content:**
{requirements}

**Technical requirements:**
1. Complete HTML5: <!DOCTYPE html>, lang="{language}", dir="{direction}"
2. meta: charset, viewport, description (120-160 chars), keywords (15-20), author
3. og:tags: title, description, type, url, image
4. Semantic HTML: header, nav, main, article, section, footer
5. Professional nav with links (home, about us, contact us)
6. Breadcrumb: Home > Section > Page
7. A complete footer
8. Basic inline CSS

**Quality:**
- Fluent {language_name}
- Realistic, useful content (Lorem Ipsum is forbidden)
- At least {min_words} words
- Realistic examples

Return HTML only, without ```html or explanations."""

FALLBACK_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{language}" dir="{direction}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="description" content="{page_name} - {idea}">
    <title>{page_name} - {idea}</title>
</head>
<body>
    <header>
        <nav>
            <a href="/">Home</a>
        </nav>
    </header>
    <main>
        <h1>{page_name}</h1>
        <p>Welcome to the {page_name} page of {idea}. You can customize this page in the editor.</p>
    </main>
</body>
</html>"""


def classify_route(route: str) -> PageTemplate:
    """Pick the page template for ``route`` by case-insensitive keyword match."""
    lowered = route.lower()
    for template in PAGE_TEMPLATES:
        if any(keyword in lowered for keyword in template.keywords):
            return template
    return GENERIC_TEMPLATE


def page_name_from_route(route: str) -> str:
    """Human-readable page name: ``/blog/privacy-policy.html`` -> ``blog privacy policy``."""
    segments = [segment.removesuffix(".html") for segment in route.split("/") if segment]
    return " ".join(segments).replace("-", " ").replace("_", " ")


def build_subpage_prompt(
    route: str,
    idea: str,
    parent_html: str,
    context_chars: int = 1500,
    language: str = "ar",
    language_name: str = "Arabic",
    direction: str = "rtl",
) -> str:
    """Prompt for one subpage, with the head of the parent HTML as context."""
    template = classify_route(route)
    page_name = page_name_from_route(route)
    return SUBPAGE_TEMPLATE.format(
        idea=idea,
        page_name=page_name,
        route=route,
        context=parent_html[:context_chars],
        requirements=template.requirements.format(page_name=page_name),
        language=language,
        language_name=language_name,
        direction=direction,
        min_words=template.min_words,
    )


def fallback_page(route: str, idea: str, language: str = "ar", direction: str = "rtl") -> str:
    """Canned page used when generation fails or falls below the quality gate."""
    return FALLBACK_PAGE_TEMPLATE.format(
        page_name=escape(page_name_from_route(route)),
        idea=escape(idea),
        language=language,
        direction=direction,
    )
