"""
Deterministic responses, one per intent.

Every handler takes (message, context, mode) and returns an AssistantResponse.
Founder copy is narrative and jargon-free; developer copy is terse and cites
rules, selectors and WCAG criteria.
"""
import logging
from typing import List

from app.features.assistant.schemas.assistant import (
    ActionSuggestion,
    AssistantContext,
    AssistantResponse,
    Issue,
    Mode,
)
from app.features.assistant.utils.remediation import (
    format_wcag,
    generate_code_fix,
    get_language,
    get_simple_explanation,
    get_technical_explanation,
)
from app.features.platform_detection.utils.guides import get_platform_guide

logger = logging.getLogger(__name__)


def is_developer(mode) -> bool:
    return mode == Mode.developer or mode == Mode.developer.value


def _mode_value(mode) -> str:
    return Mode.developer.value if is_developer(mode) else Mode.founder.value


def _issues_with_impact(context: AssistantContext, impact: str) -> List[Issue]:
    return [issue for issue in context.top_issues if (issue.impact or "").lower() == impact]


# ============================================================================
# Fix / platform guide
# ============================================================================

def handle_fix(message: str, context: AssistantContext, mode) -> AssistantResponse:
    top_issue = context.top_issues[0] if context.top_issues else None
    logger.info(f"Fix request: has_issue={top_issue is not None}, mode={_mode_value(mode)}")

    if top_issue is None:
        return AssistantResponse(
            intent="fix", content="No issues found to fix! Your site looks good.", actions=[]
        )

    guide = get_platform_guide(context.site.platform, top_issue.rule, _mode_value(mode))

    if is_developer(mode):
        return AssistantResponse(
            intent="fix",
            content=(
                f"**{top_issue.rule}** ({top_issue.impact})\n"
                f"**WCAG**: {format_wcag(top_issue)}\n\n"
                f"{guide}\n\n"
                "I can generate a PR or create GitHub issues for batch fixes."
            ),
            actions=[
                ActionSuggestion(label="Generate code fix", action="generate-fix", icon="Code"),
                ActionSuggestion(label="Create GitHub issue", action="create-issue", icon="Github"),
            ],
        )

    return AssistantResponse(
        intent="fix",
        content=(
            f"Let's fix your **{top_issue.description}** issue. "
            f"This is {top_issue.impact} priority.\n\n"
            f"{guide}\n\n"
            "Want me to walk you through the others?"
        ),
        actions=[
            ActionSuggestion(label="Yes, show next issue", action="next-issue", icon="Code"),
            ActionSuggestion(label="Email full guide", action="email-guide", icon="Mail"),
        ],
    )


def handle_platform_guide(message: str, context: AssistantContext, mode) -> AssistantResponse:
    platform = context.site.platform
    top_issue = context.top_issues[0] if context.top_issues else None
    logger.info(f"Platform guide request: platform={platform}, rule={top_issue.rule if top_issue else None}")

    if top_issue is None:
        return AssistantResponse(
            intent="platform-guide", content="No issues found to generate guides for!", actions=[]
        )

    guide = get_platform_guide(platform, top_issue.rule, _mode_value(mode))

    if is_developer(mode):
        content = (
            f"**Fix Guide for {top_issue.rule}** ({platform}):\n\n"
            f"{guide}\n\n"
            f"**WCAG**: {format_wcag(top_issue)}\n"
            f"**Selector**: {top_issue.selector or 'Multiple elements'}\n\n"
            "Ready to fix the next violation?"
        )
    else:
        content = (
            f"Here's how to fix **{top_issue.description}** in {platform}:\n\n"
            f"{guide}\n\n"
            "This will make your site accessible to everyone and keep you legally compliant. "
            "Need help with the next issue?"
        )

    return AssistantResponse(
        intent="platform-guide",
        content=content,
        actions=[
            ActionSuggestion(label="Show next issue", action="next-issue", icon="Code"),
            ActionSuggestion(label="Create GitHub issue for this", action="github-single", icon="Github"),
        ],
    )


# ============================================================================
# Tickets and reports
# ============================================================================

def handle_github(message: str, context: AssistantContext, mode) -> AssistantResponse:
    issue_count = context.scan.total_issues
    logger.info(f"GitHub request: issues={issue_count}, mode={_mode_value(mode)}")

    if is_developer(mode):
        content = (
            f"I'll create GitHub issues for all {issue_count} violations. Each issue will include:\n\n"
            "```markdown\n"
            "## Accessibility Violation: [Rule Name]\n\n"
            "**Severity**: Critical\n"
            "**WCAG**: 2.2 Level AA\n"
            "**Selector**: .main-nav button\n\n"
            "### Fix\n[Code snippet]\n\n"
            "### Testing\n[Validation steps]\n"
            "```\n\n"
            "Proceed?"
        )
    else:
        content = (
            "I can create tickets in GitHub for your development team. Each ticket will include:\n\n"
            "• Clear description of the issue\n"
            "• Step-by-step fix instructions\n"
            "• WCAG compliance criteria\n"
            "• Priority level\n\n"
            f"Shall I create {issue_count} GitHub issues?"
        )

    return AssistantResponse(
        intent="github",
        content=content,
        actions=[
            ActionSuggestion(
                label=f"Create {issue_count} GitHub issues", action="github-bulk-create", icon="Github"
            ),
            ActionSuggestion(label="Preview issue format", action="preview-issue", icon="FileText"),
        ],
    )


def handle_email(message: str, context: AssistantContext, mode) -> AssistantResponse:
    issue_count = context.scan.total_issues
    logger.info(f"Email request: issues={issue_count}, mode={_mode_value(mode)}")

    if is_developer(mode):
        content = (
            "I can generate a technical report including:\n\n"
            f"• All {issue_count} violations with selectors\n"
            "• Code snippets for fixes\n"
            "• WCAG 2.2 criteria references\n"
            "• Testing procedures\n\n"
            "Provide recipient email:"
        )
    else:
        content = (
            "I'll create a clear, non-technical report for your designer that includes:\n\n"
            "📊 Visual examples of issues\n"
            "✅ Before/After mockups\n"
            "📝 Plain-language descriptions\n"
            "🎯 Prioritized action list\n\n"
            "What email should I send it to?"
        )

    return AssistantResponse(
        intent="email",
        content=content,
        actions=[ActionSuggestion(label="Enter email address", action="prompt-email", icon="Mail")],
    )


# ============================================================================
# Code and explanations
# ============================================================================

def handle_code(message: str, context: AssistantContext, mode) -> AssistantResponse:
    top_issue = context.top_issues[0] if context.top_issues else None
    logger.info(f"Code request: rule={top_issue.rule if top_issue else None}")

    if top_issue is None:
        return AssistantResponse(intent="code", content="No issues to generate code for!", actions=[])

    content = (
        f"Here's a fix for **{top_issue.description}**:\n\n"
        f"```{get_language(context.site.platform)}\n"
        f"{generate_code_fix(top_issue)}\n"
        "```\n\n"
        f"This addresses WCAG {format_wcag(top_issue, default='2.2 AA')}."
    )
    return AssistantResponse(
        intent="code",
        content=content,
        actions=[
            ActionSuggestion(label="Copy code", action="copy-code", icon="Code"),
            ActionSuggestion(label="Create PR with this fix", action="create-pr", icon="Github"),
            ActionSuggestion(label="Show next issue", action="next-code-fix", icon="Code"),
        ],
    )


def handle_explain(message: str, context: AssistantContext, mode) -> AssistantResponse:
    top_issue = context.top_issues[0] if context.top_issues else None
    logger.info(f"Explain request: rule={top_issue.rule if top_issue else None}, mode={_mode_value(mode)}")

    if top_issue is None:
        return AssistantResponse(
            intent="explain", content="No issues to explain! Your site is accessible.", actions=[]
        )

    if is_developer(mode):
        content = (
            f"**{top_issue.rule}**: {top_issue.impact} severity\n\n"
            f"**WCAG Criteria**: {format_wcag(top_issue)}\n"
            f"**Affected Elements**: {top_issue.selector or 'Multiple'}\n\n"
            "**Technical Impact**:\n"
            "• Blocks screen reader navigation\n"
            "• Keyboard trap potential\n"
            "• ARIA tree incomplete\n\n"
            f"**Remediation**: {get_technical_explanation(top_issue)}"
        )
    else:
        content = (
            f"Your biggest issue is **{top_issue.description}**.\n\n"
            "🎯 **Why it matters**: People using screen readers or keyboards can't access this "
            "part of your site. This affects about 15-20% of users and violates ADA requirements.\n\n"
            f"💡 **The fix**: {get_simple_explanation(top_issue)}\n\n"
            f"Want to see how to do this in {context.site.platform}?"
        )

    return AssistantResponse(
        intent="explain",
        content=content,
        actions=[
            ActionSuggestion(label="Show fix instructions", action="show-fix", icon="Code"),
            ActionSuggestion(label="Explain next issue", action="explain-next", icon="Code"),
        ],
    )


# ============================================================================
# Priorities
# ============================================================================

def _tier_lines(issues: List[Issue], total: int, shown: int, developer: bool) -> str:
    shown = min(shown, len(issues))
    if developer:
        lines = [f"  • {issue.rule} - {issue.selector or 'multiple'}" for issue in issues[:shown]]
        if total > shown:
            lines.append(f"  ...{total - shown} more")
    else:
        lines = [f"  {idx}. {issue.description}" for idx, issue in enumerate(issues[:shown], start=1)]
        if total > shown:
            lines.append(f"  ...and {total - shown} more")
    return "\n".join(lines)


def handle_priorities(message: str, context: AssistantContext, mode) -> AssistantResponse:
    critical = _issues_with_impact(context, "critical")
    serious = _issues_with_impact(context, "serious")
    moderate = _issues_with_impact(context, "moderate")
    developer = is_developer(mode)
    scan = context.scan
    # Tier sizes come from the whole scan; only the listed items are capped
    totals = {impact: scan.count(impact) for impact in ("critical", "serious", "moderate")}

    logger.info(
        f"Priority request: critical={totals['critical']}, serious={totals['serious']}, "
        f"moderate={totals['moderate']}"
    )

    if not any(totals.values()):
        return AssistantResponse(
            intent="priorities",
            content=(
                "No P0/P1 violations detected. Site meets WCAG AA baseline."
                if developer
                else "🎉 Great news! No critical or serious issues found. Your site is in good shape!"
            ),
            actions=[],
        )

    if developer:
        tiers = [
            ("**P0 - Critical**", "critical", critical, 3),
            ("**P1 - Serious**", "serious", serious, 3),
            ("**P2 - Moderate**", "moderate", moderate, 2),
        ]
        sections = [
            f"{title} ({totals[impact]}):\n{_tier_lines(issues, totals[impact], shown, True)}\n\n"
            for title, impact, issues, shown in tiers
            if totals[impact]
        ]
        content = (
            f"**Priority Matrix** (Total: {scan.total_issues}):\n\n"
            + "".join(sections)
            + "Address P0 violations first to reach WCAG AA baseline."
        )
    else:
        tiers = [
            ("🔴 **Fix First**", "critical", critical, 3),
            ("🟡 **Fix Next**", "serious", serious, 3),
            ("🟢 **Then Fix**", "moderate", moderate, 2),
        ]
        sections = [
            f"{title} ({totals[label]} {label}):\n{_tier_lines(issues, totals[label], shown, False)}\n\n"
            for title, label, issues, shown in tiers
            if totals[label]
        ]
        content = (
            "Here's your prioritized action plan:\n\n"
            + "".join(sections)
            + "**Recommendation**: Start with critical issues. They carry the biggest legal risk "
            "and user impact. Want to see how to fix the first one?"
        )

    if critical:
        actions = [
            ActionSuggestion(
                label=f"Fix: {critical[0].description}", action="fix-first-critical", icon="Code"
            ),
            ActionSuggestion(
                label="Create GitHub issues (prioritized)", action="github-prioritized", icon="Github"
            ),
        ]
    elif serious:
        actions = [
            ActionSuggestion(
                label=f"Fix: {serious[0].description}", action="fix-first-serious", icon="Code"
            ),
            ActionSuggestion(label="Create GitHub issues", action="github-bulk", icon="Github"),
        ]
    else:
        actions = []

    return AssistantResponse(intent="priorities", content=content, actions=actions)


# ============================================================================
# Greeting / clarification / empty scan
# ============================================================================

def handle_greeting(message: str, context: AssistantContext, mode) -> AssistantResponse:
    scan = context.scan
    platform = context.site.platform

    if is_developer(mode):
        content = (
            f"Scan complete. Found **{scan.total_issues} violations**:\n"
            f"• {scan.count('critical')} critical\n"
            f"• {scan.count('serious')} serious\n"
            f"• {scan.count('moderate')} moderate\n"
            f"• {scan.count('minor')} minor\n\n"
            "I can assist with:\n"
            "• WCAG remediation guides\n"
            "• Code generation for common fixes\n"
            "• GitHub issue/PR creation\n"
            "• Technical documentation export\n\n"
            "Where should we begin?"
        )
        actions = [
            ActionSuggestion(label="View prioritized issues", action="top-priorities", icon="AlertTriangle"),
            ActionSuggestion(label="Generate code fixes", action="generate-code", icon="Code"),
        ]
    else:
        critical_note = (
            f"⚠️ {scan.count('critical')} are critical and need immediate attention.\n\n"
            if scan.count("critical") > 0
            else ""
        )
        content = (
            f"Hi! I've analyzed your scan and found **{scan.total_issues} accessibility issues**.\n\n"
            f"{critical_note}"
            "I can help you:\n"
            "• Understand what needs fixing and why\n"
            f"• Show you how to fix issues in {platform}\n"
            "• Create an action plan prioritized by impact\n\n"
            "What would you like to start with?"
        )
        actions = [
            ActionSuggestion(label="Show me priorities", action="top-priorities", icon="AlertTriangle"),
            ActionSuggestion(label=f"{platform} fix guide", action="platform-guide", icon="Code"),
        ]

    return AssistantResponse(intent="greeting", content=content, actions=actions)


def handle_clarification(message: str, context: AssistantContext, mode) -> AssistantResponse:
    if is_developer(mode):
        content = (
            "Command not recognized. Available options:\n"
            "• priorities - View sorted issue list\n"
            "• fix [rule-id] - Get remediation code\n"
            "• github - Create issues/PRs\n"
            "• explain - WCAG criteria details"
        )
    else:
        content = (
            "I'm not sure what you're asking. Try:\n"
            '• "Show me priorities" - See what to fix first\n'
            '• "How do I fix this?" - Get step-by-step guides\n'
            '• "Email to designer" - Share a report'
        )
    return AssistantResponse(intent="clarification", content=content, actions=[])


def nothing_to_fix(intent: str, mode) -> AssistantResponse:
    if is_developer(mode):
        content = "No violations detected, so there is nothing to fix. The site passes the automated WCAG AA checks."
    else:
        content = (
            "🎉 Great news! Your scan found no accessibility issues, so there's nothing to fix right now. "
            "Keep scanning regularly to stay compliant."
        )
    return AssistantResponse(intent=intent, content=content, actions=[])


def connection_trouble_response(mode) -> AssistantResponse:
    if is_developer(mode):
        content = (
            "Connection error. You can still export issues or create GitHub tickets "
            "using the buttons above."
        )
    else:
        content = (
            "I'm having trouble connecting right now. Would you like to speak with "
            "a human specialist instead?"
        )
    return AssistantResponse(
        intent="connection-error",
        content=content,
        actions=[ActionSuggestion(label="Talk to a specialist", action="handoff", icon="Mail")],
    )
