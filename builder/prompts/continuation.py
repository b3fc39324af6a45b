"""Prompts for incremental edit requests against an existing site."""

from .registry import CONTENT_RULES

CONTINUATION_SYSTEM_PROMPT = (
    "You are an expert web developer who modifies existing code exactly as the user asks. "
    "Always answer with valid JSON only, without markdown or explanations."
)

CONTINUATION_TEMPLATE = """Modify the existing website according to the user's request.

Current code:

HTML:
```html
{html}
```

CSS:
```css
{css}
```

JavaScript:
```javascript
{js}
```

User request: {message}

Instructions:
1. Apply exactly the requested change
2. Keep everything else as it is (HTML, CSS and JavaScript)
3. Do not remove existing features or sections unless asked to
4. Keep the design consistent with the current style
5. Keep the code clean and organized
6. Return the full code, not only the changed parts
7. Keep {direction_upper} support and the page language

{content_rules}

Return the result as JSON only, in exactly this shape:
{{
  "html": "full HTML after the change",
  "css": "full CSS after the change",
  "js": "full JavaScript after the change",
  "message": "short description of what was changed"
}}"""


def build_continuation_prompt(html: str, css: str, js: str, message: str, direction: str = "rtl") -> str:
    return CONTINUATION_TEMPLATE.format(
        html=html,
        css=css,
        js=js,
        message=message,
        direction_upper=direction.upper(),
        content_rules=CONTENT_RULES,
    )
