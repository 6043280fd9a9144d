"""
System prompt assembly for the language-model strategy.

The prompt carries the scan summary, the top issues, three concrete failing
nodes and builder-specific instruction blocks so replies stay grounded in
the user's actual site.
"""
from typing import Dict, List, Optional

from app.features.assistant.schemas.assistant import AssistantContext
from app.features.assistant.services.intent_handlers import is_developer
from app.features.assistant.utils.remediation import format_wcag, get_node_snippet, get_verdict_emoji
from app.platform.config import settings

EXAMPLE_NODE_COUNT = 3
GUIDED_PLATFORMS = ("framer", "webflow", "wordpress")

PLATFORM_INSTRUCTIONS: Dict[str, str] = {
    "framer": (
        "**Framer-Specific Steps Format:**\n"
        "When giving instructions, use exact Framer UI paths:\n"
        "1. Select the element in canvas\n"
        "2. Right panel → Accessibility section\n"
        '3. Add "ARIA Label" field with descriptive text\n'
        "4. Click Publish → Update site\n"
        "Reference: Components panel, Props panel, Canvas interactions"
    ),
    "webflow": (
        "**Webflow-Specific Steps Format:**\n"
        "When giving instructions, use exact Webflow UI paths:\n"
        "1. Select element in Designer\n"
        "2. Settings panel (D key) → Element Settings\n"
        "3. Add alt text / aria-label / role attribute\n"
        "4. Publish to [staging/production]\n"
        "Reference: Designer, Settings panel, Custom attributes, Style panel"
    ),
    "wordpress": (
        "**WordPress-Specific Steps Format:**\n"
        "When giving instructions, use exact WordPress paths:\n"
        "1. Edit page in Block Editor / Page Builder\n"
        "2. Select block/element → Block settings (right sidebar)\n"
        '3. Advanced → "Additional CSS class" or "HTML attributes"\n'
        "4. Update/Publish page\n"
        "Reference: Block Editor, Customizer, Appearance → Theme Editor"
    ),
    "nextjs": (
        "**Next.js/React-Specific Steps:**\n"
        "Provide JSX/TSX code with proper imports and TypeScript types.\n"
        "Reference semantic HTML and ARIA attributes."
    ),
    "react": (
        "**React-Specific Steps:**\n"
        "Provide JSX code with hooks (useState, useEffect) if needed.\n"
        "Reference WAI-ARIA patterns and React best practices."
    ),
}


def get_platform_instructions(platform: str) -> str:
    instructions = PLATFORM_INSTRUCTIONS.get((platform or "").lower())
    if instructions:
        return instructions
    return (
        f"**Platform: {platform}**\n"
        'Detection confidence low. Ask: "Are you using Framer, Webflow, or WordPress?" '
        "then provide exact steps for their builder."
    )


def _mode_instructions(context: AssistantContext, developer: bool) -> str:
    if developer:
        return (
            "**Audience**: Developer\n"
            "**Language**: Technical, precise\n"
            "**Focus**: Implementation, code, WCAG criteria\n"
            '**Actions**: "Create GitHub issues", code snippets, selectors\n'
            "**Tone**: Direct, technical, implementation-focused"
        )
    return (
        "**Audience**: Non-technical founder\n"
        "**Language**: Plain English, zero jargon\n"
        "**Focus**: Business impact, user experience, legal risk\n"
        f'**Actions**: "Fix contrast now", "Open {context.site.platform} steps", '
        '"Email designer", "Download CSV"\n'
        "**Tone**: Encouraging, practical, executive-level"
    )


def _issue_block(context: AssistantContext, issue_limit: int) -> str:
    return "\n\n".join(
        f"{idx}. [{(issue.impact or 'unknown').upper()}] {issue.description}\n"
        f"   Rule: {issue.rule}\n"
        f"   Selector: {issue.selector or 'multiple elements'}\n"
        f"   WCAG: {format_wcag(issue)}"
        for idx, issue in enumerate(context.top_issues[:issue_limit], start=1)
    )


def _example_block(context: AssistantContext) -> str:
    return "\n\n".join(
        f"Example {idx}: {issue.rule}\n"
        f"   Location: {context.site.url}\n"
        f"   Selector: {issue.selector or 'element'}\n"
        f"   Code: {get_node_snippet(issue)}"
        for idx, issue in enumerate(context.top_issues[:EXAMPLE_NODE_COUNT], start=1)
    )


def build_system_prompt(context: AssistantContext, mode, issue_limit: Optional[int] = None) -> str:
    issue_limit = settings.PROMPT_ISSUE_LIMIT if issue_limit is None else issue_limit
    developer = is_developer(mode)
    platform = context.site.platform
    scan = context.scan

    if (platform or "").lower() in GUIDED_PLATFORMS:
        platform_rule = f"Give EXACT steps for {platform} (menus, fields, publish path). No generic instructions."
    else:
        platform_rule = (
            'Platform detection uncertain - ask "Do you use Framer/Webflow/WordPress?" '
            "then provide specific steps"
        )

    return f"""You are Auditvia AI Engineer, an expert accessibility compliance assistant.

{_mode_instructions(context, developer)}

**Current Scan Context:**
Site: **{context.site.name}**
URL: {context.site.url}
Platform: **{platform}**
Verdict: **{scan.verdict}** ({get_verdict_emoji(scan.verdict)})
Issues: {scan.total_issues} total ({scan.count('critical')} critical, {scan.count('serious')} serious, {scan.count('moderate')} moderate)

**Top {issue_limit} Rules to Fix:**
{_issue_block(context, issue_limit)}

**{EXAMPLE_NODE_COUNT} Concrete Examples:**
{_example_block(context)}

{get_platform_instructions(platform)}

**Critical Instructions:**
1. **Use scan context**: Always reference actual site name, verdict, and specific issues from above
2. **Platform-specific**: {platform_rule}
3. **Contrast issues**: When discussing color-contrast, compute compliant alternatives and suggest an Accessible Palette:
   • Body text: #1a1a1a (21:1 ratio)
   • Muted text: #4a4a4a (9:1 ratio)
   • Primary brand: [suggest based on current colors]
   • On-primary text: #ffffff (ensure 4.5:1+)
   Offer "Apply to all" vs "Per element"
4. **Time estimates**: Include realistic time (e.g., "~15min", "~2 hours")
5. **Format**: Lead with answer, add time estimate, end with ONE next action
6. **Tone**: Short, confident, zero filler. No "I hope this helps" or "Let me know"
7. **Length**: Max 250 words

**Response Structure:**
[Direct answer with specifics]
[Time estimate]
[One clear next action]

Never say "guide not available" - if uncertain, ask which platform they use."""


def build_messages(context: AssistantContext, message: str, mode) -> List[Dict[str, str]]:
    """System prompt, then the kept history, then the new user turn."""
    messages = [{"role": "system", "content": build_system_prompt(context, mode)}]
    for entry in context.conversation_history:
        role = "user" if entry.role == "user" else "assistant"
        messages.append({"role": role, "content": entry.content})
    messages.append({"role": "user", "content": message})
    return messages
