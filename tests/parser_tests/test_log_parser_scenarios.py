# tests/parser_tests/test_log_parser_scenarios.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Test suite for splitting logs into executions and events

"""Test suite for LogParser and ExecutionParser.

Covers delimiter splitting and labeling, event extraction with extra
fields, line numbering, and the fatal errors raised for bad patterns,
repeated labels and malformed clocks.
"""

import re

import pytest
from logparsing import (
    DEFAULT_EVENT_PATTERN,
    DuplicateLabelError,
    ExecutionParser,
    LogParser,
    MalformedClockError,
    MissingCaptureGroupError,
    UnknownLabelError,
)

DELIMITER = r"=== (?P<trace>\w+) ==="


class TestLogParserScenarios:
    """Test cases for multi-execution logs."""

    def test_01_no_delimiter_single_unlabeled_execution(self, request_reply_log, event_pattern):
        parser = LogParser(request_reply_log, None, event_pattern)
        assert parser.get_labels() == [""]
        events = parser.get_log_events("")
        assert [e.text for e in events] == [
            "send request", "receive request", "send reply", "receive reply",
        ]
        assert [e.host for e in events] == ["client", "server", "server", "client"]

    def test_02_delimiter_without_matches(self, request_reply_log, event_pattern):
        parser = LogParser(request_reply_log, DELIMITER, event_pattern)
        assert parser.get_labels() == [""]
        assert len(parser.get_log_events("")) == 4

    def test_03_labels_follow_delimiters(self, multi_execution_log, event_pattern):
        parser = LogParser(multi_execution_log, DELIMITER, event_pattern)
        assert parser.get_labels() == ["first", "second"]
        assert [e.text for e in parser.get_log_events("first")] == ["start"]
        assert [e.text for e in parser.get_log_events("second")] == ["start", "stop"]

    def test_04_text_before_first_delimiter_is_unlabeled(self, event_pattern):
        log = 'boot\nA {"A":1}\n=== run ===\nwork\nA {"A":1}'
        parser = LogParser(log, DELIMITER, event_pattern)
        assert parser.get_labels() == ["", "run"]

    def test_05_blank_segments_are_dropped(self, event_pattern):
        """
        Back to back delimiters leave a blank segment; it takes no label
        slot and the label captured before it is discarded.
        """
        log = '=== empty ===\n   \n=== real ===\ngo\nA {"A":1}\n=== tail ===\n'
        parser = LogParser(log, DELIMITER, event_pattern)
        assert parser.get_labels() == ["real"]
        assert parser.get_log_events("empty") is None

    def test_06_at_most_n_plus_one_labels(self, event_pattern):
        log = "\n".join(
            ['x\nA {"A":1}']
            + [f'=== t{i} ===\nx\nA {{"A":1}}' for i in range(5)]
        )
        parser = LogParser(log, DELIMITER, event_pattern)
        assert parser.get_labels() == ["", "t0", "t1", "t2", "t3", "t4"]

    def test_07_delimiter_without_trace_group_uses_ordinals(self, event_pattern):
        log = 'x\nA {"A":1}\n---\ny\nB {"B":1}\n---\nz\nC {"C":1}'
        parser = LogParser(log, r"---", event_pattern)
        assert parser.get_labels() == ["", "1", "2"]
        assert parser.get_log_events("2")[0].text == "z"

    def test_08_duplicate_label_is_fatal(self, event_pattern):
        log = '=== a ===\nx\nA {"A":1}\n=== a ===\ny\nA {"A":1}'
        with pytest.raises(DuplicateLabelError) as info:
            LogParser(log, DELIMITER, event_pattern)
        assert info.value.label == "a"

    def test_09_unknown_label(self, multi_execution_log, event_pattern):
        parser = LogParser(multi_execution_log, DELIMITER, event_pattern)
        assert parser.get_log_events("third") is None
        with pytest.raises(UnknownLabelError):
            parser.get_execution("third")
        with pytest.raises(KeyError):
            parser.get_execution("third")

    def test_10_executions_in_order(self, multi_execution_log, event_pattern):
        parser = LogParser(multi_execution_log, DELIMITER, event_pattern)
        executions = parser.get_executions()
        assert [x.label for x in executions] == ["first", "second"]
        assert len(executions[1].events) == 2

    def test_11_missing_event_group_fails_before_parsing(self):
        with pytest.raises(MissingCaptureGroupError) as info:
            LogParser("{{{ not even a log", None, r"(?P<event>.*) (?P<clock>\{.*\})")
        assert info.value.missing == ("host",)

    def test_12_compiled_patterns_are_accepted(self, multi_execution_log):
        parser = LogParser(
            multi_execution_log,
            re.compile(DELIMITER),
            re.compile(DEFAULT_EVENT_PATTERN),
        )
        assert parser.get_labels() == ["first", "second"]

    def test_13_returned_lists_are_copies(self, request_reply_log, event_pattern):
        parser = LogParser(request_reply_log, None, event_pattern)
        parser.get_labels().append("bogus")
        parser.get_log_events("").clear()
        assert parser.get_labels() == [""]
        assert len(parser.get_log_events("")) == 4


class TestExecutionParserScenarios:
    """Test cases for events inside one execution."""

    def test_01_line_numbers(self, request_reply_log, event_pattern):
        events = ExecutionParser(request_reply_log, "", event_pattern).get_log_events()
        assert [e.line_number for e in events] == [1, 3, 5, 7]

    def test_02_line_number_counts_newlines_before_match(self):
        text = '\n\nA {"A":1} first\n\nA {"A":2} second'
        pattern = r"(?P<host>\w+) (?P<clock>\{[^}]*\}) (?P<event>\w+)"
        events = ExecutionParser(text, "", pattern).get_log_events()
        for event in events:
            offset = text.index(event.text) - len('A {"A":1} ')
            assert event.line_number == 1 + text.count("\n", 0, offset)
        assert [e.line_number for e in events] == [3, 5]

    def test_03_extra_groups_become_fields(self):
        text = '12:00 INFO A {"A":1} boot\n12:01 WARN A {"A":2} disk'
        pattern = (
            r"(?P<time>\S+) (?P<level>\w+)(?: (?P<tag>#\w+))? "
            r"(?P<host>\w+) (?P<clock>\{[^}]*\}) (?P<event>\w+)"
        )
        events = ExecutionParser(text, "", pattern).get_log_events()
        assert dict(events[0].fields) == {"time": "12:00", "level": "INFO"}
        assert events[1].get_fields() == {"time": "12:01", "level": "WARN"}

    def test_04_fixed_host_without_host_group(self):
        """Two lines with only clock and text, both logged by host A."""
        text = '{"A":1} m1\n{"A":2,"B":1} m2'
        pattern = r"(?P<clock>\{[^}]*\}) (?P<event>\w+)"
        events = ExecutionParser(text, "", pattern, host="A").get_log_events()

        assert [e.host for e in events] == ["A", "A"]
        assert [e.line_number for e in events] == [1, 2]
        m1, m2 = events
        assert m2.timestamp.get("A") > m1.timestamp.get("A")
        assert m1.timestamp < m2.timestamp

    def test_05_malformed_clock_aborts_with_context(self, event_pattern):
        text = 'ok\nA {"A":1}\nbad\nA {"A":2,}'
        with pytest.raises(MalformedClockError) as info:
            ExecutionParser(text, "", event_pattern)
        error = info.value
        assert error.line == 3
        assert error.text == '{"A":2,}'
        assert "bad" in error.excerpt
        assert "line 3" in str(error)

    def test_06_clock_owner_must_count_itself(self, event_pattern):
        with pytest.raises(MalformedClockError):
            ExecutionParser('x\nB {"A":1}', "", event_pattern)

    def test_07_no_matches(self, event_pattern):
        assert ExecutionParser("nothing to see", "", event_pattern).get_log_events() == []
