import logging
from typing import List

from app.features.assistant.schemas.assistant import ActionSuggestion, AssistantContext
from app.features.assistant.services.intent_handlers import is_developer

logger = logging.getLogger(__name__)

MAX_ACTIONS = 3
GITHUB_ISSUE_CAP = 10


def _has_any(text: str, *keywords: str) -> bool:
    return any(keyword in text for keyword in keywords)


def _has_contrast_issues(context: AssistantContext) -> bool:
    return any(
        "contrast" in issue.rule or "contrast" in issue.description.lower()
        for issue in context.top_issues
    )


def _founder_actions(text: str, context: AssistantContext) -> List[ActionSuggestion]:
    platform = context.site.platform
    actions = []

    if _has_any(text, "contrast", "color") and _has_contrast_issues(context):
        actions.append(ActionSuggestion(label="Fix contrast now", action="fix-contrast", icon="Sparkles"))
        actions.append(ActionSuggestion(label="Get accessible palette", action="generate-palette", icon="Code"))

    if _has_any(text, "step", "how") or (platform and platform.lower() in text):
        actions.append(
            ActionSuggestion(label=f"Open {platform} steps", action="platform-guide", icon="ExternalLink")
        )

    if _has_any(text, "designer", "team", "report"):
        actions.append(ActionSuggestion(label="Email to designer", action="email-designer", icon="Mail"))

    if _has_any(text, "download", "export", "csv"):
        actions.append(ActionSuggestion(label="Download CSV", action="download-csv", icon="FileText"))

    if _has_any(text, "priority", "first", "start"):
        actions.append(ActionSuggestion(label="Show priorities", action="top-priorities", icon="AlertTriangle"))

    return actions


def _developer_actions(text: str, context: AssistantContext) -> List[ActionSuggestion]:
    actions = []

    if _has_any(text, "github", "issue", "pr"):
        critical = context.scan.count("critical")
        count = critical if critical > 0 else min(context.scan.total_issues, GITHUB_ISSUE_CAP)
        actions.append(
            ActionSuggestion(label=f"Create {count} GitHub issues", action="github-bulk", icon="Github")
        )

    if _has_any(text, "code", "fix", "snippet"):
        top_rule = context.top_issues[0].rule if context.top_issues else "issues"
        actions.append(
            ActionSuggestion(label=f"Generate fixes for {top_rule}", action="generate-code", icon="Code")
        )

    if _has_any(text, "selector", "element"):
        actions.append(ActionSuggestion(label="Show all selectors", action="show-selectors", icon="FileText"))

    if _has_any(text, "contrast", "color") and _has_contrast_issues(context):
        actions.append(
            ActionSuggestion(label="Generate accessible palette", action="generate-palette", icon="Code")
        )

    if _has_any(text, "priority", "p0", "critical"):
        actions.append(
            ActionSuggestion(label="View priority matrix", action="top-priorities", icon="AlertTriangle")
        )

    return actions


def _default_actions(context: AssistantContext, developer: bool) -> List[ActionSuggestion]:
    if not context.top_issues:
        return []
    if developer:
        count = min(context.scan.total_issues, GITHUB_ISSUE_CAP)
        return [
            ActionSuggestion(label=f"Create {count} GitHub issues", action="github-bulk", icon="Github"),
            ActionSuggestion(label="Generate code fixes", action="generate-code", icon="Code"),
        ]
    return [
        ActionSuggestion(label="Show what to fix first", action="top-priorities", icon="AlertTriangle"),
        ActionSuggestion(label=f"{context.site.platform} fix guide", action="platform-guide", icon="Code"),
    ]


def unique_actions(actions: List[ActionSuggestion], limit: int = MAX_ACTIONS) -> List[ActionSuggestion]:
    """Drop repeated action ids, keeping the first label seen, and cap the list."""
    seen = set()
    unique = []
    for action in actions:
        if action.action in seen:
            continue
        seen.add(action.action)
        unique.append(action)
    return unique[:limit]


def suggest_actions(response_text: str, context: AssistantContext, mode) -> List[ActionSuggestion]:
    """
    Derive follow-up actions from free-text assistant output.

    Returns at most three actions with unique ids. Falls back to two
    mode-specific defaults when nothing matches and issues exist. Never raises;
    on unexpected input an empty list is returned.
    """
    try:
        text = (response_text or "").lower()
        developer = is_developer(mode)
        actions = _developer_actions(text, context) if developer else _founder_actions(text, context)
        if not actions:
            actions = _default_actions(context, developer)
        return unique_actions(actions)
    except Exception as e:
        logger.warning(f"Action suggestion failed, returning none: {str(e)}")
        return []
