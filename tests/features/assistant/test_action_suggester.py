"""
Tests for action suggestions derived from free-text responses.
"""

from app.features.assistant.schemas.assistant import ActionSuggestion, Mode
from app.features.assistant.services.action_suggester import suggest_actions, unique_actions


class TestSuggestActions:

    def test_founder_contrast_actions(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("color-contrast", "serious")])
        actions = suggest_actions("Darken the text color to fix contrast.", context, Mode.founder)
        assert [a.action for a in actions][:2] == ["fix-contrast", "generate-palette"]

    def test_contrast_text_without_contrast_issues(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("image-alt", "critical")])
        actions = suggest_actions("The color of your logo is lovely.", context, Mode.founder)
        assert "fix-contrast" not in [a.action for a in actions]

    def test_founder_platform_steps_label(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("image-alt", "critical")], platform="webflow")
        actions = suggest_actions("Here are the steps in the Designer.", context, Mode.founder)
        assert actions[0].label == "Open webflow steps"
        assert actions[0].action == "platform-guide"

    def test_developer_github_uses_critical_count(self, context_factory, issue_factory):
        issues = [issue_factory("a", "critical"), issue_factory("b", "critical"), issue_factory("c", "minor")]
        context = context_factory(issues=issues, mode="developer")
        actions = suggest_actions("Open a GitHub issue per rule.", context, Mode.developer)
        assert actions[0].label == "Create 2 GitHub issues"

    def test_developer_code_names_top_rule(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("label", "critical")], mode="developer")
        actions = suggest_actions("Here is a code snippet.", context, Mode.developer)
        assert ActionSuggestion(label="Generate fixes for label", action="generate-code", icon="Code") in actions

    def test_at_most_three_unique_actions(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("color-contrast", "critical")])
        text = "Steps: fix the contrast and color, email your designer, export a CSV, start with priority items."
        actions = suggest_actions(text, context, Mode.founder)
        assert len(actions) == 3
        assert len({a.action for a in actions}) == 3

    def test_founder_defaults(self, context_factory, issue_factory):
        context = context_factory(issues=[issue_factory("image-alt", "critical")], platform="framer")
        actions = suggest_actions("Sure.", context, Mode.founder)
        assert [(a.label, a.action) for a in actions] == [
            ("Show what to fix first", "top-priorities"),
            ("framer fix guide", "platform-guide"),
        ]

    def test_developer_defaults(self, context_factory, issue_factory):
        issues = [issue_factory(f"r{n}", "minor") for n in range(12)]
        context = context_factory(issues=issues, mode="developer")
        actions = suggest_actions("Okay.", context, Mode.developer)
        assert [a.label for a in actions] == ["Create 10 GitHub issues", "Generate code fixes"]

    def test_no_issues_no_defaults(self, context_factory):
        assert suggest_actions("Okay.", context_factory(issues=[]), Mode.founder) == []

    def test_never_raises(self, context_factory):
        assert suggest_actions(None, None, Mode.founder) == []


class TestUniqueActions:

    def test_keeps_first_label(self):
        actions = [
            ActionSuggestion(label="first", action="top-priorities", icon="AlertTriangle"),
            ActionSuggestion(label="second", action="top-priorities", icon="AlertTriangle"),
            ActionSuggestion(label="other", action="generate-code", icon="Code"),
        ]
        assert [a.label for a in unique_actions(actions)] == ["first", "other"]
