"""
对话编排：状态转移表、字段合并规则、chat 端到端（mock completion）、历史上限与整轮失败兜底。
"""
import asyncio
import json

import pytest

from jobdesk.assistant import (
    ConversationState,
    DialogueOrchestrator,
    Intent,
    Step,
    next_step,
)
from jobdesk.assistant.prompts import APOLOGY, EMPTY_RESPONSE_FALLBACK, HELP_RESUME
from jobdesk.core.errors import CompletionError


def run(coro):
    return asyncio.run(coro)


def _state(intent):
    return ConversationState(messages=[{"role": "user", "content": "x"}], intent=intent)


# ──────────────────────────────────────────────
# 1. next_step：转移表
# ──────────────────────────────────────────────

class TestTransitions:
    def test_start_goes_to_classify(self):
        assert next_step(Step.START, _state(None)) == Step.CLASSIFY_INTENT

    @pytest.mark.parametrize("intent,expected", [
        (Intent.HELP, Step.HELP_RESPONSE),
        (Intent.SEARCH, Step.EXTRACT_FILTERS),
        (Intent.FILTER, Step.EXTRACT_FILTERS),
        (Intent.CLEAR, Step.GENERATE_RESPONSE),
        (Intent.GENERAL, Step.GENERATE_RESPONSE),
    ])
    def test_classify_routes_by_intent(self, intent, expected):
        assert next_step(Step.CLASSIFY_INTENT, _state(intent)) == expected

    def test_extract_goes_to_generate(self):
        assert next_step(Step.EXTRACT_FILTERS, _state(Intent.SEARCH)) == Step.GENERATE_RESPONSE

    @pytest.mark.parametrize("step", [Step.HELP_RESPONSE, Step.GENERATE_RESPONSE])
    def test_response_steps_finish(self, step):
        assert next_step(step, _state(Intent.GENERAL)) == Step.DONE

    def test_done_is_terminal(self):
        with pytest.raises(ValueError):
            next_step(Step.DONE, _state(Intent.GENERAL))


# ──────────────────────────────────────────────
# 2. ConversationState.apply：合并规则
# ──────────────────────────────────────────────

class TestReducers:
    def test_messages_append_only(self):
        s = ConversationState(messages=[{"role": "user", "content": "a"}])
        s.apply({"messages": [{"role": "assistant", "content": "b"}]})
        assert [m["content"] for m in s.messages] == ["a", "b"]

    def test_intent_and_response_last_write_wins(self):
        s = ConversationState()
        s.apply({"intent": Intent.SEARCH, "response": "one"})
        s.apply({"intent": Intent.FILTER, "response": "two"})
        assert s.intent == Intent.FILTER
        assert s.response == "two"

    def test_none_does_not_overwrite(self):
        s = ConversationState(intent=Intent.HELP, response="kept")
        s.apply({"intent": None, "response": None})
        assert s.intent == Intent.HELP
        assert s.response == "kept"

    def test_filters_shallow_merge(self):
        s = ConversationState(filters={"role": "frontend", "location": "Pune"})
        s.apply({"filters": {"location": "Delhi", "workMode": "remote"}})
        assert s.filters == {"role": "frontend", "location": "Delhi", "workMode": "remote"}

    def test_unknown_field_rejected(self):
        with pytest.raises(KeyError):
            ConversationState().apply({"mood": "happy"})


# ──────────────────────────────────────────────
# 3. chat：各路径
# ──────────────────────────────────────────────

REACT_FILTERS = json.dumps({
    "role": "React developer", "skills": ["React"], "datePosted": None,
    "jobType": None, "workMode": None, "location": None, "matchScore": None,
})


class TestChat:
    def test_search_path_classify_extract_generate(self, fake_llm):
        llm = fake_llm("SEARCH", REACT_FILTERS, "Here are React developer jobs!")
        result = run(DialogueOrchestrator(llm).chat("Show me React developer jobs"))
        assert result.intent == Intent.SEARCH
        assert result.filters == {"role": "React developer", "skills": ["React"]}
        assert result.response == "Here are React developer jobs!"
        assert len(llm.calls) == 3

    def test_help_path_makes_single_call(self, fake_llm):
        llm = fake_llm("HELP")
        result = run(DialogueOrchestrator(llm).chat("How do I upload my resume?"))
        assert result.intent == Intent.HELP
        assert result.response == HELP_RESUME
        assert result.filters == {}
        assert len(llm.calls) == 1  # 仅分类，不调生成

    def test_clear_path_skips_extraction(self, fake_llm):
        llm = fake_llm("CLEAR", "All filters cleared.")
        result = run(DialogueOrchestrator(llm).chat("clear everything"))
        assert result.intent == Intent.CLEAR
        assert result.filters == {}
        assert len(llm.calls) == 2

    def test_unknown_intent_falls_to_general(self, fake_llm):
        llm = fake_llm("MAYBE", "Happy to chat!")
        result = run(DialogueOrchestrator(llm).chat("hi there"))
        assert result.intent == Intent.GENERAL
        assert result.response == "Happy to chat!"

    def test_extraction_failure_keeps_turn_alive(self, fake_llm):
        llm = fake_llm("FILTER", "not json", "Applying your filters.")
        result = run(DialogueOrchestrator(llm).chat("remote please"))
        assert result.intent == Intent.FILTER
        assert result.filters == {}
        assert result.response == "Applying your filters."

    def test_total_failure_returns_apology(self, failing_llm):
        result = run(DialogueOrchestrator(failing_llm).chat("Show me React developer jobs"))
        assert result.response == APOLOGY
        assert result.intent == Intent.GENERAL
        assert result.filters == {}

    def test_generation_failure_after_extraction_returns_apology(self, fake_llm):
        llm = fake_llm("SEARCH", REACT_FILTERS, CompletionError("boom"))
        result = run(DialogueOrchestrator(llm).chat("Show me React developer jobs"))
        assert result.response == APOLOGY
        assert result.intent == Intent.GENERAL
        assert result.filters == {}

    def test_empty_reply_uses_default_hint(self, fake_llm):
        llm = fake_llm("GENERAL", "   ")
        result = run(DialogueOrchestrator(llm).chat("hello"))
        assert result.response == EMPTY_RESPONSE_FALLBACK

    def test_message_is_trimmed(self, fake_llm):
        llm = fake_llm("GENERAL", "hi")
        assistant = DialogueOrchestrator(llm)
        run(assistant.chat("   hello   "))
        assert assistant.history[0] == {"role": "user", "content": "hello"}
        assert llm.calls[1]["prompt"][-1] == {"role": "user", "content": "hello"}


# ──────────────────────────────────────────────
# 4. 会话历史
# ──────────────────────────────────────────────

class TestHistory:
    def test_six_turns_keep_last_ten_in_order(self, fake_llm):
        replies = []
        for i in range(6):
            replies += ["GENERAL", f"reply {i}"]
        assistant = DialogueOrchestrator(fake_llm(*replies))
        for i in range(6):
            run(assistant.chat(f"message {i}"))
        history = assistant.history
        assert len(history) == 10
        expected = []
        for i in range(1, 6):
            expected += [
                {"role": "user", "content": f"message {i}"},
                {"role": "assistant", "content": f"reply {i}"},
            ]
        assert history == expected

    def test_generation_context_is_previous_turns(self, fake_llm):
        llm = fake_llm("GENERAL", "first reply", "GENERAL", "second reply")
        assistant = DialogueOrchestrator(llm)
        run(assistant.chat("first"))
        run(assistant.chat("second"))
        messages = llm.calls[3]["prompt"]
        assert messages[1:] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "first reply"},
            {"role": "user", "content": "second"},
        ]

    def test_history_never_used_for_classification(self, fake_llm):
        llm = fake_llm("GENERAL", "first reply", "GENERAL", "second reply")
        assistant = DialogueOrchestrator(llm)
        run(assistant.chat("first"))
        run(assistant.chat("second"))
        classify_prompt = llm.calls[2]["prompt"]
        assert isinstance(classify_prompt, str)
        assert "first" not in classify_prompt

    def test_failed_turn_records_only_user_message(self, failing_llm):
        assistant = DialogueOrchestrator(failing_llm)
        run(assistant.chat("hello"))
        assert assistant.history == [{"role": "user", "content": "hello"}]

    def test_clear_history(self, fake_llm):
        assistant = DialogueOrchestrator(fake_llm("GENERAL", "hi"))
        run(assistant.chat("hello"))
        assistant.clear_history()
        assert assistant.history == []

    def test_custom_limit(self, fake_llm):
        assistant = DialogueOrchestrator(fake_llm(default="GENERAL"), max_history=3)
        for i in range(4):
            run(assistant.chat(f"m{i}"))
        assert len(assistant.history) == 3
