"""Canned remediation copy used by the deterministic responses and the prompt builder."""
from typing import Dict, Optional

from app.features.assistant.schemas.assistant import Issue

CODE_LANGUAGES: Dict[str, str] = {
    "react": "tsx",
    "nextjs": "tsx",
    "vue": "vue",
    "wordpress": "php",
    "webflow": "html",
    "framer": "tsx",
    "custom": "html",
}

CODE_FIXES: Dict[str, str] = {
    "image-alt": '<img src="..." alt="Descriptive text about the image" />',
    "button-name": '<button aria-label="Submit form">Submit</button>',
    "link-name": '<a href="..." aria-label="Read more about accessibility">Read more</a>',
    "color-contrast": "/* Change text color for better contrast */\n.text { color: #1a1a1a; /* 16.9:1 ratio */ }",
    "label": '<label htmlFor="email">Email Address</label>\n<input id="email" type="email" />',
}

SIMPLE_EXPLANATIONS: Dict[str, str] = {
    "image-alt": "Add a text description so screen readers can describe the image to users who can't see it",
    "button-name": "Make sure every button has clear text or a label so people know what it does",
    "color-contrast": "Use darker text on light backgrounds so everyone can read it easily",
    "label": "Add labels to form fields so people know what information to enter",
}

TECHNICAL_EXPLANATIONS: Dict[str, str] = {
    "image-alt": 'Add alt attribute with descriptive text. Use alt="" for decorative images.',
    "button-name": "Ensure <button> has text content or aria-label. Avoid empty buttons or icon-only without labels.",
    "color-contrast": "Achieve 4.5:1 contrast ratio for normal text, 3:1 for large text (WCAG AA)",
    "label": "Associate <label> with <input> via for/id attributes or wrap input inside label",
}

# Representative failing markup for each rule
NODE_SNIPPETS: Dict[str, str] = {
    "button-name": "<button></button>",
    "link-name": '<a href="/contact"></a>',
    "image-alt": '<img src="logo.png">',
    "color-contrast": "color: #999; background: #fff;",
    "label": '<input type="text">',
    "aria-required-attr": '<div role="button"></div>',
    "heading-order": "<h1>Title</h1><h3>Subtitle</h3>",
}

VERDICT_EMOJIS: Dict[str, str] = {
    "compliant": "✅",
    "at-risk": "⚠️",
    "non-compliant": "❌",
}


def get_language(platform: str) -> str:
    return CODE_LANGUAGES.get((platform or "").lower(), "html")


def generate_code_fix(issue: Issue) -> str:
    fix = CODE_FIXES.get(issue.rule)
    if fix:
        return fix
    return f"// Fix for {issue.rule}\n// Add appropriate ARIA attributes or semantic HTML"


def get_simple_explanation(issue: Issue) -> str:
    return SIMPLE_EXPLANATIONS.get(issue.rule, "This needs to be fixed for accessibility")


def get_technical_explanation(issue: Issue) -> str:
    return TECHNICAL_EXPLANATIONS.get(issue.rule, "Follow WCAG 2.2 Level AA guidelines")


def get_node_snippet(issue: Issue) -> str:
    return NODE_SNIPPETS.get(issue.rule, f"<element>{issue.description}</element>")


def get_verdict_emoji(verdict: Optional[str]) -> str:
    return VERDICT_EMOJIS.get(verdict or "", "⚠️")


def format_wcag(issue: Issue, default: str = "N/A") -> str:
    return ", ".join(issue.wcag_refs) if issue.wcag_refs else default
