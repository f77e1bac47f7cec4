# tests/integration_tests/test_end_to_end_scenarios.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# End-to-end tests from raw log text to motif matches

"""Integration test suite covering the whole pipeline.

Raw log text is split into executions, each execution becomes a causality
graph, and a motif read from its serialized form is searched in every graph.
The command-line entry point is exercised on files written to a temporary
directory, checking its reported matches and exit codes.
"""

import json
import logging
import sys

import pytest
import run_search
from logparsing import LogParser
from model import BuilderGraph, VectorTimestampSerializer, build_graph
from motif import MotifFinder, read_motif
from utils.logger import configure_logging, get_logger

DELIMITER = r"=== (?P<trace>\w+) ==="


def request_reply_motif() -> str:
    bg = BuilderGraph(["a", "b"])
    send = bg.add_node("a")
    recv = bg.add_node("b")
    reply = bg.add_node("b")
    done = bg.add_node("a")
    send.add_child(recv)
    reply.add_child(done)
    return VectorTimestampSerializer().serialize(bg.to_vector_timestamps())


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def messages():
    """Messages written through the global logger while the test runs."""
    collector = _Collector()
    get_logger().logger.addHandler(collector)
    yield collector.messages
    get_logger().logger.removeHandler(collector)
    configure_logging()


@pytest.fixture
def run_cli(monkeypatch):
    def run(*argv):
        monkeypatch.setattr(sys, "argv", ["run_search.py", *map(str, argv)])
        return run_search.main()

    return run


class TestPipelineScenarios:
    """Test cases chaining parser, graph builder and finder."""

    def test_request_reply_in_single_execution(self, request_reply_log, event_pattern):
        parser = LogParser(request_reply_log, None, event_pattern)
        graph = build_graph(parser.get_log_events(""))
        motif = MotifFinder().find(graph, read_motif(request_reply_motif()))

        assert [n.log_event.line_number for n in motif.get_nodes()] == [1, 3, 5, 7]
        assert [parent.id for parent, _ in motif.get_edges()] == [0, 1, 0, 2]

    def test_each_execution_gets_its_own_graph(self, multi_execution_log, event_pattern):
        parser = LogParser(multi_execution_log, DELIMITER, event_pattern)
        graphs = {x.label: build_graph(x.events) for x in parser.get_executions()}

        assert graphs["first"].get_hosts() == ["A"]
        assert graphs["second"].get_hosts() == ["B"]
        assert [len(g) for g in graphs.values()] == [1, 2]

        pattern = read_motif('#motif=[{"host":"x","clock":{"x":1}},{"host":"x","clock":{"x":2}}]')
        finder = MotifFinder()
        assert finder.search(graphs["first"], pattern) is None
        assert finder.find(graphs["second"], pattern).to_dict()["matched_node_ids"] == [0, 1]

    def test_fixed_host_log(self):
        parser = LogParser('{"A":1} m1\n{"A":2,"B":1} m2\n', None,
                           r"(?P<clock>\{[^}]*\}) (?P<event>\w+)", host="A")
        events = parser.get_log_events("")
        assert [e.text for e in events] == ["m1", "m2"]
        assert events[0].timestamp < events[1].timestamp


class TestCommandLineScenarios:
    """Test cases for run_search.main exit codes and reported matches."""

    def test_match_is_reported_as_json(self, tmp_path, request_reply_log, messages, run_cli):
        log = tmp_path / "run.log"
        log.write_text(request_reply_log, encoding="utf-8")
        motif = tmp_path / "rr.motif"
        motif.write_text(request_reply_motif(), encoding="utf-8")

        assert run_cli("-l", log, "-m", motif) == 0

        results = [json.loads(m) for m in messages if m.startswith("{")]
        assert results == [
            {
                "matched_node_ids": [0, 1, 2, 3],
                "matched_edges": [[0, 1], [0, 3], [1, 2], [2, 3]],
                "execution": "",
                "lines": [1, 3, 5, 7],
            }
        ]

    def test_verbose_lists_matched_events(self, tmp_path, request_reply_log, messages, run_cli):
        log = tmp_path / "run.log"
        log.write_text(request_reply_log, encoding="utf-8")
        motif = tmp_path / "rr.motif"
        motif.write_text(request_reply_motif(), encoding="utf-8")

        assert run_cli("-l", log, "-m", motif) == 0
        assert not any("send request" in m for m in messages)

        assert run_cli("-l", log, "-m", motif, "-v") == 0
        details = [m.strip() for m in messages if m.startswith("    ")]
        assert details == [
            "client line 1: send request",
            "server line 3: receive request",
            "server line 5: send reply",
            "client line 7: receive reply",
        ]

    def test_label_selects_one_execution(self, tmp_path, multi_execution_log, messages, run_cli):
        log = tmp_path / "runs.log"
        log.write_text(multi_execution_log, encoding="utf-8")
        motif = tmp_path / "one.motif"
        motif.write_text('[{"host":"x","clock":{"x":1}}]', encoding="utf-8")

        assert run_cli("-l", log, "-m", motif, "-d", DELIMITER, "--label", "second", "--all") == 0

        results = [json.loads(m) for m in messages if m.startswith("{")]
        assert [r["execution"] for r in results] == ["second", "second"]
        assert [r["lines"] for r in results] == [[2], [4]]

    def test_validate_only_needs_no_motif(self, tmp_path, request_reply_log, messages, run_cli):
        log = tmp_path / "run.log"
        log.write_text(request_reply_log, encoding="utf-8")

        assert run_cli("-l", log, "--validate-only") == 0
        assert any("Log validation successful" in m for m in messages)

    def test_missing_log_file(self, tmp_path, messages, run_cli):
        assert run_cli("-l", tmp_path / "absent.log", "--validate-only") == 3

    def test_bad_motif(self, tmp_path, request_reply_log, messages, run_cli):
        log = tmp_path / "run.log"
        log.write_text(request_reply_log, encoding="utf-8")
        motif = tmp_path / "bad.motif"
        motif.write_text("#motif={not json}", encoding="utf-8")

        assert run_cli("-l", log, "-m", motif) == 2
        assert any(m.startswith("Motif error") for m in messages)

    def test_unknown_label(self, tmp_path, multi_execution_log, messages, run_cli):
        log = tmp_path / "runs.log"
        log.write_text(multi_execution_log, encoding="utf-8")
        motif = tmp_path / "one.motif"
        motif.write_text('[{"host":"x","clock":{"x":1}}]', encoding="utf-8")

        assert run_cli("-l", log, "-m", motif, "-d", DELIMITER, "--label", "third") == 1

    def test_malformed_clock_in_log(self, tmp_path, messages, run_cli):
        log = tmp_path / "bad.log"
        log.write_text('boot\nA {"A":1,}\n', encoding="utf-8")

        assert run_cli("-l", log, "--validate-only") == 1
        assert any("line 1" in m for m in messages)

    def test_step_budget(self, tmp_path, request_reply_log, messages, run_cli):
        log = tmp_path / "run.log"
        log.write_text(request_reply_log, encoding="utf-8")
        motif = tmp_path / "rr.motif"
        motif.write_text(request_reply_motif(), encoding="utf-8")

        assert run_cli("-l", log, "-m", motif, "--max-steps", 1) == 4
