"""
Tests for the deterministic intent router and its handlers.
"""

import pytest

from app.features.assistant.schemas.assistant import Mode
from app.features.assistant.services.intent_handlers import connection_trouble_response
from app.features.assistant.services.intent_router import INTENT_RULES, IntentRouter

router = IntentRouter()


@pytest.fixture
def mixed_issues(issue_factory):
    return [
        issue_factory("color-contrast", "serious", "Elements must have sufficient color contrast"),
        issue_factory("image-alt", "critical", "Images must have alternate text"),
        issue_factory("button-name", "critical", "Buttons must have discernible text"),
    ]


class TestIntentMatching:

    def test_rule_order(self):
        assert [rule.intent for rule in INTENT_RULES] == [
            "priorities",
            "fix",
            "github",
            "email",
            "code",
            "explain",
            "platform-guide",
        ]

    @pytest.mark.parametrize(
        "message,intent",
        [
            ("what are my priorities", "priorities"),
            ("Where do I START?", "priorities"),
            ("how do I fix this", "fix"),
            ("open a github ticket", "github"),
            ("send this to my designer", "email"),
            ("give me a snippet", "code"),
            ("explain this to me", "explain"),
            ("webflow steps please", "platform-guide"),
        ],
    )
    def test_first_match(self, message, intent, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, platform="webflow")
        assert router.route(message, context, Mode.founder).intent == intent

    def test_earlier_rule_wins_overlap(self, context_factory, mixed_issues):
        # matches both priorities ("first") and fix ("how" + "fix")
        context = context_factory(issues=mixed_issues)
        assert router.route("how do I fix the first one", context, Mode.founder).intent == "priorities"

    def test_unmatched_first_message_is_greeting(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues)
        assert router.route("hello", context, Mode.founder).intent == "greeting"

    def test_unmatched_follow_up_is_clarification(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, history=[{"role": "user", "content": "hi"}])
        response = router.route("hmm", context, Mode.founder)
        assert response.intent == "clarification"
        assert response.actions == []


class TestScenarios:

    def test_founder_priorities(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, mode="founder")
        response = router.route("what are my priorities", context, Mode.founder)

        assert response.intent == "priorities"
        assert "2" in response.content
        assert "critical" in response.content
        assert "fix-first-critical" in [a.action for a in response.actions]

    def test_developer_greeting(self, context_factory, issue_factory):
        issues = [
            issue_factory("a", "critical"),
            issue_factory("b", "critical"),
            issue_factory("c", "serious"),
            issue_factory("d", "moderate"),
            issue_factory("e", "minor"),
        ]
        context = context_factory(issues=issues, mode="developer")
        response = router.route("hello", context, Mode.developer)

        assert response.intent == "greeting"
        assert "5 violations" in response.content
        assert "2 critical" in response.content
        assert "1 serious" in response.content
        assert "1 moderate" in response.content
        assert "1 minor" in response.content
        assert [a.action for a in response.actions] == ["top-priorities", "generate-code"]

    @pytest.mark.parametrize("platform", ["webflow", "wordpress", "custom"])
    @pytest.mark.parametrize("mode", [Mode.founder, Mode.developer])
    def test_no_issues_means_nothing_to_fix(self, context_factory, platform, mode):
        context = context_factory(issues=[], platform=platform, mode=mode.value)
        response = router.route("how do I fix this", context, mode)

        assert response.intent == "fix"
        assert "nothing to fix" in response.content.lower()
        assert response.actions == []

    def test_no_issues_greeting(self, context_factory):
        response = router.route("hello", context_factory(issues=[]), Mode.founder)
        assert "nothing to fix" in response.content.lower()
        assert response.actions == []


class TestHandlers:

    def test_fix_uses_platform_guide(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, platform="webflow", mode="developer")
        response = router.route("how do I fix it", context, Mode.developer)
        # top issue after sorting is the first critical one
        assert "**image-alt** (critical)" in response.content
        assert "Webflow" in response.content
        assert [a.action for a in response.actions] == ["generate-fix", "create-issue"]

    def test_code_uses_platform_language(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, platform="wordpress")
        response = router.route("show me code", context, Mode.founder)
        assert response.intent == "code"
        assert "```php" in response.content
        assert 'alt="Descriptive text about the image"' in response.content
        assert len(response.actions) == 3

    def test_github_counts_issues(self, context_factory, mixed_issues):
        response = router.route("create github tickets", context_factory(issues=mixed_issues), Mode.founder)
        assert response.actions[0].label == "Create 3 GitHub issues"

    def test_explain_founder(self, context_factory, mixed_issues):
        response = router.route("explain it", context_factory(issues=mixed_issues), Mode.founder)
        assert "Images must have alternate text" in response.content
        assert "screen readers" in response.content

    def test_developer_priorities_matrix(self, context_factory, mixed_issues):
        context = context_factory(issues=mixed_issues, mode="developer")
        response = router.route("top issues", context, Mode.developer)
        assert response.intent == "priorities"
        assert "**P0 - Critical** (2)" in response.content
        assert "**P1 - Serious** (1)" in response.content

    def test_counts_cover_issues_beyond_context_cap(self, context_factory, issue_factory):
        issues = [issue_factory(f"critical-{n}", "critical", f"Critical {n}") for n in range(12)]
        issues += [issue_factory("label", "serious", "Form elements must have labels")]
        context = context_factory(issues=issues)
        assert len(context.top_issues) == 10

        greeting = router.route("hello", context, Mode.founder)
        priorities = router.route("what are my priorities", context, Mode.founder)
        github = router.route("create github tickets", context, Mode.founder)

        assert "12 are critical" in greeting.content
        assert "(12 critical)" in priorities.content
        assert "...and 9 more" in priorities.content
        assert "(1 serious)" in priorities.content
        assert "Shall I create 13 GitHub issues?" in github.content

    def test_developer_matrix_total_is_whole_scan(self, context_factory, issue_factory):
        issues = [issue_factory(f"r{n}", "moderate") for n in range(15)]
        context = context_factory(issues=issues, mode="developer")
        response = router.route("top issues", context, Mode.developer)
        assert "**Priority Matrix** (Total: 15)" in response.content
        assert "**P2 - Moderate** (15)" in response.content
        assert "...13 more" in response.content

    def test_only_minor_issues_priorities(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("region", "minor")])
        response = router.route("priorities", context, Mode.founder)
        assert "No critical or serious issues" in response.content
        assert response.actions == []

    def test_serious_only_priorities_action(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("label", "serious", "Form elements must have labels")])
        response = router.route("priorities", context, Mode.founder)
        assert response.actions[0].action == "fix-first-serious"
        assert response.actions[1].action == "github-bulk"


class TestConnectionTrouble:

    def test_founder(self):
        response = connection_trouble_response(Mode.founder)
        assert response.content == (
            "I'm having trouble connecting right now. Would you like to speak with "
            "a human specialist instead?"
        )
        assert [a.action for a in response.actions] == ["handoff"]

    def test_developer(self):
        response = connection_trouble_response("developer")
        assert response.content.startswith("Connection error.")
        assert [a.action for a in response.actions] == ["handoff"]
