from app.features.assistant.schemas.assistant import Mode
from app.features.assistant.services.prompt_builder import (
    build_system_prompt,
    get_platform_instructions,
)


class TestSystemPrompt:

    def test_includes_scan_context(self, context_factory, issue_factory):
        issues = [
            issue_factory("image-alt", "critical", "Images must have alternate text", wcag=["1.1.1"]),
            issue_factory("color-contrast", "serious", "Low contrast", selector=None),
        ]
        prompt = build_system_prompt(context_factory(issues=issues, platform="webflow"), Mode.founder)

        assert "Site: **Acme**" in prompt
        assert "Platform: **webflow**" in prompt
        assert "Verdict: **at-risk** (⚠️)" in prompt
        assert "2 total (1 critical, 1 serious, 0 moderate)" in prompt
        assert "1. [CRITICAL] Images must have alternate text" in prompt
        assert "Selector: multiple elements" in prompt
        assert 'Code: <img src="logo.png">' in prompt
        assert "Webflow-Specific Steps Format" in prompt
        assert "Give EXACT steps for webflow" in prompt
        assert "Non-technical founder" in prompt

    def test_issue_limit(self, context_factory, issue_factory):
        issues = [issue_factory(f"rule-{n}", "minor") for n in range(8)]
        prompt = build_system_prompt(context_factory(issues=issues), Mode.developer, issue_limit=5)
        assert "5. [MINOR]" in prompt
        assert "6. [MINOR]" not in prompt
        assert "**Audience**: Developer" in prompt

    def test_unknown_platform_asks(self, context_factory):
        prompt = build_system_prompt(context_factory(platform="custom"), Mode.founder)
        assert "Platform detection uncertain" in prompt
        assert "Are you using Framer, Webflow, or WordPress?" in prompt

    def test_platform_instructions_fallback(self):
        assert get_platform_instructions("ghost").startswith("**Platform: ghost**")
        assert "JSX/TSX" in get_platform_instructions("nextjs")
