#  Copyright (c) 2025 Tom Villani, Ph.D.
"""End-to-end find and replace scenarios.

Each scenario drives a ``FindController`` the way an editor's find bar does
(typing, waiting out the debounce, navigating, replacing) against both a flat
buffer and a single-paragraph document tree. Tree positions sit one past the
flat ones because the paragraph's opening boundary occupies position 0.
"""

import json
import subprocess
import sys

import pytest
from utils import as_pairs, cleanup_test_dir, create_test_temp_dir, flat_doc, tree_doc

from livefind.search import FindController, MatchSpan, SessionPhase

SENTENCE = "cat sat on the cat mat"

SUBSTRATES = [
    pytest.param(flat_doc, 0, id="flat"),
    pytest.param(tree_doc, 1, id="tree"),
]


def _open(factory, text, scheduler, view):
    document = factory(text)
    controller = FindController(scheduler, view=view)
    controller.open(document)
    return document, controller


def _type(controller, scheduler, term):
    for end in range(1, len(term) + 1):
        controller.set_query(term[:end])
        scheduler.advance(0.125)
    scheduler.advance(0.25)


@pytest.mark.e2e
@pytest.mark.parametrize("factory,offset", SUBSTRATES)
class TestFindScenarios:
    """Find bar scenarios on both document substrates."""

    def test_find_and_wrap(self, factory, offset, scheduler, view):
        """Test finding two matches and wrapping navigation."""
        _, controller = _open(factory, SENTENCE, scheduler, view)
        _type(controller, scheduler, "cat")

        session = controller.session
        assert as_pairs(session.results) == [[0 + offset, 3 + offset], [15 + offset, 18 + offset]]
        assert controller.status.match_count == 2
        assert session.cursor == 0

        assert controller.next() == MatchSpan(15 + offset, 18 + offset)
        assert session.cursor == 1
        assert controller.next() == MatchSpan(0 + offset, 3 + offset)
        assert session.cursor == 0

        scheduler.advance(1.0)
        assert view.reveals == [MatchSpan(15 + offset, 18 + offset), MatchSpan(0 + offset, 3 + offset)]
        assert [d.style for d in view.last_render] == ["current", "normal"]

    def test_replace_all(self, factory, offset, scheduler, view):
        document, controller = _open(factory, SENTENCE, scheduler, view)
        _type(controller, scheduler, "cat")

        assert controller.replace_all("dog") == 2
        assert "".join(run.text for run in document.text_runs()) == "dog sat on the dog mat"
        assert controller.status.match_count == 0
        assert controller.phase == SessionPhase.EMPTY

        controller.set_query("cat")
        assert controller.flush()
        assert controller.status.match_count == 0
        assert controller.status.label == "No results"

    def test_non_overlapping(self, factory, offset, scheduler, view):
        _, controller = _open(factory, "aaa", scheduler, view)
        _type(controller, scheduler, "aa")
        assert as_pairs(controller.session.results) == [[0 + offset, 2 + offset]]

    def test_metacharacters_are_literal(self, factory, offset, scheduler, view):
        _, controller = _open(factory, "a.b axb", scheduler, view)
        _type(controller, scheduler, "a.b")
        assert as_pairs(controller.session.results) == [[0 + offset, 3 + offset]]

    def test_typing_then_editing(self, factory, offset, scheduler, view):
        """Test that matches follow edits made while the find bar is open."""
        document, controller = _open(factory, SENTENCE, scheduler, view)
        _type(controller, scheduler, "cat")
        controller.next()

        document.insert_text(offset, "the ")
        assert as_pairs(controller.session.results) == [[4 + offset, 7 + offset], [19 + offset, 22 + offset]]
        assert controller.session.cursor == 1

        document.undo()
        assert as_pairs(controller.session.results) == [[0 + offset, 3 + offset], [15 + offset, 18 + offset]]

    def test_replace_one_by_one(self, factory, offset, scheduler, view):
        document, controller = _open(factory, SENTENCE, scheduler, view)
        _type(controller, scheduler, "cat")

        assert controller.replace_current("cow")
        assert controller.status.label == "1 of 1"
        assert controller.replace_current("cow")
        assert controller.status.match_count == 0
        assert not controller.replace_current("cow")
        assert "".join(run.text for run in document.text_runs()) == "cow sat on the cow mat"


@pytest.mark.e2e
@pytest.mark.cli
class TestCommandLine:
    """Run the installed module as a subprocess."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = create_test_temp_dir()
        self.notes = self.temp_dir / "notes.txt"
        self.notes.write_text(SENTENCE, encoding="utf-8")

    def teardown_method(self):
        """Clean up test environment."""
        cleanup_test_dir(self.temp_dir)

    def _run(self, *args):
        return subprocess.run(
            [sys.executable, "-m", "livefind", *args, "--no-config"],
            capture_output=True,
            text=True,
            cwd=self.temp_dir,
        )

    def test_find_json(self):
        result = self._run("find", str(self.notes), "cat", "--json")
        assert result.returncode == 0
        payload = json.loads(result.stdout)
        assert [[m["start"], m["end"]] for m in payload["matches"]] == [[0, 3], [15, 18]]

    def test_replace_in_place(self):
        result = self._run("replace", str(self.notes), "cat", "dog", "--in-place")
        assert result.returncode == 0
        assert self.notes.read_text(encoding="utf-8") == "dog sat on the dog mat"
        assert "Replaced 2 matches" in result.stderr

    def test_no_matches_exit_code(self):
        result = self._run("find", str(self.notes), "dog")
        assert result.returncode == 1
