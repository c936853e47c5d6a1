"""
Tests for the conversation state machine.
"""

import json

import pytest

from agent import prompts
from agent.state_machine import ConversationStateMachine
from models.conversation import (
    BivouacQuery,
    CampQuery,
    ConversationState,
    FlowKind,
    ItemQuery,
    PersistAction,
)


@pytest.fixture
def machine():
    return ConversationStateMachine()


class TestIdle:
    """No active flow."""

    @pytest.mark.parametrize("text", ["こんにちは", "テントのおすすめは？", "きゃんぷ", ""])
    def test_unrecognized_text_goes_to_general(self, machine, text):
        result = machine.step("U1", text)

        assert result.terminal is not None
        assert result.terminal.kind == FlowKind.GENERAL
        assert result.terminal.text == text
        assert result.persist == PersistAction.NONE
        assert result.next_state is None
        assert result.reply is None

    @pytest.mark.parametrize("trigger, state, prompt", [
        (prompts.CAMP_TRIGGER, ConversationState.CAMP_WAITING_REGION, prompts.CAMP_REGION_PROMPT),
        (prompts.BIVOUAC_TRIGGER, ConversationState.BIVOUAC_WAITING_PREFECTURE, prompts.BIVOUAC_PREFECTURE_PROMPT),
        (prompts.ITEM_TRIGGER, ConversationState.ITEM_WAITING_LOCATION, prompts.ITEM_LOCATION_PROMPT),
    ])
    def test_trigger_starts_flow(self, machine, trigger, state, prompt):
        result = machine.step("U1", trigger)

        assert result.next_state == state
        assert result.reply == prompt
        assert result.persist == PersistAction.SAVE
        assert result.data is None
        assert result.terminal is None

    def test_trigger_with_surrounding_whitespace(self, machine):
        result = machine.step("U1", f"  {prompts.CAMP_TRIGGER}\n")
        assert result.next_state == ConversationState.CAMP_WAITING_REGION


class TestCampFlow:
    def test_region_advances_to_date(self, machine):
        result = machine.step("U1", "Tokyo", ConversationState.CAMP_WAITING_REGION.value, None)

        assert result.next_state == ConversationState.CAMP_WAITING_DATE
        assert result.persist == PersistAction.SAVE
        assert result.data == CampQuery(region="Tokyo")
        assert result.reply == prompts.CAMP_DATE_PROMPT

    def test_date_keeps_region(self, machine):
        result = machine.step(
            "U1", "3/1", ConversationState.CAMP_WAITING_DATE.value, json.dumps({"region": "Tokyo"})
        )

        assert result.next_state == ConversationState.CAMP_WAITING_CONDITIONS
        assert result.data == CampQuery(region="Tokyo", date="3/1")
        assert result.reply == prompts.CAMP_CONDITIONS_PROMPT

    def test_last_field_clears_and_runs_terminal(self, machine):
        result = machine.step(
            "U1",
            "pet-friendly",
            ConversationState.CAMP_WAITING_CONDITIONS.value,
            json.dumps({"region": "Tokyo", "date": "3/1"}),
        )

        assert result.persist == PersistAction.CLEAR
        assert result.next_state is None
        assert result.reply is None
        assert result.terminal.kind == FlowKind.CAMP
        assert result.terminal.query == CampQuery(region="Tokyo", date="3/1", conditions="pet-friendly")

    def test_trigger_text_inside_flow_is_stored_as_value(self, machine):
        result = machine.step(
            "U1", prompts.BIVOUAC_TRIGGER, ConversationState.CAMP_WAITING_DATE.value, '{"region": "Tokyo"}'
        )

        assert result.next_state == ConversationState.CAMP_WAITING_CONDITIONS
        assert result.data.date == prompts.BIVOUAC_TRIGGER


class TestOtherFlows:
    def test_bivouac_flow(self, machine):
        first = machine.step("U1", "北海道", ConversationState.BIVOUAC_WAITING_PREFECTURE.value)
        assert first.next_state == ConversationState.BIVOUAC_WAITING_CONDITIONS
        assert first.reply == prompts.BIVOUAC_CONDITIONS_PROMPT

        last = machine.step(
            "U1", "無料", first.next_state.value, first.data.model_dump_json(exclude_none=True)
        )
        assert last.persist == PersistAction.CLEAR
        assert last.terminal.kind == FlowKind.BIVOUAC
        assert last.terminal.query == BivouacQuery(prefecture="北海道", conditions="無料")

    def test_item_flow(self, machine):
        state, data = ConversationState.ITEM_WAITING_LOCATION.value, None
        for text in ["山", "1泊2日"]:
            result = machine.step("U1", text, state, data)
            assert result.persist == PersistAction.SAVE
            state, data = result.next_state.value, result.data.model_dump_json(exclude_none=True)

        result = machine.step("U1", "冬", state, data)
        assert result.terminal.kind == FlowKind.ITEM
        assert result.terminal.query == ItemQuery(location="山", duration="1泊2日", conditions="冬")


class TestDefensiveReset:
    def test_unknown_state_clears_and_falls_back(self, machine):
        result = machine.step("U1", "hello", "no_such_state", '{"region": "Tokyo"}')

        assert result.persist == PersistAction.CLEAR
        assert result.terminal.kind == FlowKind.GENERAL
        assert result.terminal.text == "hello"
        assert result.reply is None

    def test_broken_data_resets(self, machine):
        result = machine.step("U1", "3/1", ConversationState.CAMP_WAITING_DATE.value, "{not json")

        assert result.persist == PersistAction.CLEAR
        assert result.terminal.kind == FlowKind.GENERAL
        assert result.terminal.text == "3/1"
        assert result.data is None

    @pytest.mark.parametrize("data", [None, "{}", '{"region": "Tokyo"}'])
    def test_final_step_with_missing_fields_resets(self, machine, data):
        result = machine.step("U1", "pet-friendly", ConversationState.CAMP_WAITING_CONDITIONS.value, data)

        assert result.persist == PersistAction.CLEAR
        assert result.terminal.kind == FlowKind.GENERAL
        assert result.terminal.query is None

    def test_first_step_ignores_stale_data(self, machine):
        result = machine.step("U1", "Tokyo", ConversationState.CAMP_WAITING_REGION.value, "{not json")

        assert result.next_state == ConversationState.CAMP_WAITING_DATE
        assert result.data == CampQuery(region="Tokyo")
