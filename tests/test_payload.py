"""
Unit Tests for Component Rewriting and Payload Synthesis
"""

import copy

from flow_compiler.services.compiler.payload import (
    build_complete_payload,
    build_navigate_payload,
    rewrite_component,
)

from flow_builders import footer, text_input


# =============================================================================
# Payload Builder Tests
# =============================================================================


class TestPayloadBuilders:
    """Tests for the pure payload builders."""

    def test_complete_payload_scopes(self):
        payload = build_complete_payload(["name", "email"], {"email"})

        assert payload == {"name": "${data.name}", "email": "${form.email}"}
        assert list(payload) == ["name", "email"]

    def test_navigate_payload_current_screen_wins(self):
        payload = build_navigate_payload(["name", "email"], ["email", "phone"])

        assert payload == {
            "name": "${data.name}",
            "email": "${form.email}",
            "phone": "${form.phone}",
        }


# =============================================================================
# Id Suppression Tests
# =============================================================================


class TestIdSuppression:
    """Component types the platform rejects an id on."""

    def test_text_input_loses_id(self):
        component = text_input("email", id="input_1")

        rewritten = rewrite_component(component, ["email"], ["email"], [])

        assert "id" not in rewritten

    def test_footer_loses_id(self):
        component = footer("navigate")
        component["id"] = "footer_1"

        assert "id" not in rewrite_component(component, [], [], [])

    def test_unknown_type_keeps_id_verbatim(self):
        component = {"type": "OptIn", "id": "opt_in-1", "label": "Agree"}

        rewritten = rewrite_component(component, [], [], [])

        assert rewritten == component


# =============================================================================
# Attribute Sanitization Tests
# =============================================================================


class TestAttributeSanitization:
    """Tests for name and data-source rewriting."""

    def test_name_sanitized(self):
        rewritten = rewrite_component(text_input("field 1"), ["fieldB"], ["fieldB"], [])

        assert rewritten["name"] == "fieldB"

    def test_data_source_option_ids(self):
        component = {
            "type": "Dropdown",
            "name": "plan",
            "data-source": [
                {"id": "plan_1", "title": "Basic"},
                {"id": "premium", "title": "Premium", "enabled": False},
                "not-an-option",
            ],
        }

        rewritten = rewrite_component(component, ["plan"], ["plan"], [])

        assert rewritten["data-source"] == [
            {"id": "plan_B", "title": "Basic"},
            {"id": "premium", "title": "Premium", "enabled": False},
            "not-an-option",
        ]

    def test_input_not_mutated(self):
        component = {
            "type": "Dropdown",
            "id": "dd_1",
            "name": "plan_1",
            "data-source": [{"id": "x_1", "title": "X"}],
            "on-click-action": {"name": "navigate"},
        }
        original = copy.deepcopy(component)

        rewritten = rewrite_component(component, ["plan_B"], ["plan_B"], [])

        assert component == original
        assert rewritten["data-source"][0] is not component["data-source"][0]


# =============================================================================
# Action Payload Tests
# =============================================================================


class TestActionPayloads:
    """Tests for action payload synthesis on components."""

    def test_complete_discards_author_payload(self):
        component = footer("complete", payload={"stale": "value"})

        rewritten = rewrite_component(component, ["email"], ["name", "email"], ["name"])

        assert rewritten["on-click-action"]["payload"] == {
            "name": "${data.name}",
            "email": "${form.email}",
        }

    def test_complete_without_fields_has_empty_payload(self):
        rewritten = rewrite_component(footer("complete"), [], [], [])

        assert rewritten["on-click-action"] == {"name": "complete", "payload": {}}

    def test_navigate_rebuilt_when_screen_has_fields(self):
        component = footer("navigate", next={"type": "screen", "name": "NEXT"}, payload={"x": "1"})

        rewritten = rewrite_component(component, ["email"], ["name", "email"], ["name"])

        assert rewritten["on-click-action"] == {
            "name": "navigate",
            "next": {"type": "screen", "name": "NEXT"},
            "payload": {"name": "${data.name}", "email": "${form.email}"},
        }

    def test_navigate_untouched_without_screen_fields(self):
        component = footer("navigate", payload={"kept": "${data.kept}"})

        rewritten = rewrite_component(component, [], ["kept"], ["kept"])

        assert rewritten["on-click-action"]["payload"] == {"kept": "${data.kept}"}

    def test_navigate_without_fields_does_not_add_payload(self):
        rewritten = rewrite_component(footer("navigate"), [], [], ["name"])

        assert "payload" not in rewritten["on-click-action"]

    def test_other_actions_pass_through(self):
        component = footer("data_exchange", payload={"screen": "${form.x}"})

        rewritten = rewrite_component(component, ["x"], ["x"], [])

        assert rewritten["on-click-action"] == component["on-click-action"]


# =============================================================================
# Nested Container Tests
# =============================================================================


class TestNestedContainers:
    """Containers are rewritten with the enclosing screen's context."""

    def test_form_children_rewritten(self):
        form = {
            "type": "Form",
            "id": "form_1",
            "children": [
                text_input("email_1", id="inner"),
                footer("complete"),
            ],
        }

        rewritten = rewrite_component(form, ["email_B"], ["name", "email_B"], ["name"])

        assert rewritten["id"] == "form_1"
        inner_input, inner_footer = rewritten["children"]
        assert inner_input == {"type": "TextInput", "name": "email_B", "label": "email_1"}
        assert inner_footer["on-click-action"]["payload"] == {
            "name": "${data.name}",
            "email_B": "${form.email_B}",
        }

    def test_non_object_component_passes_through(self):
        assert rewrite_component("raw", [], [], []) == "raw"
