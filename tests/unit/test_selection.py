# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import unittest
from pathlib import Path
from unittest import mock

from wpsnapshot.cli.flows import select as select_module
from wpsnapshot.cli.flows.select import (
    AllChoice,
    IndexChoice,
    InvalidChoice,
    QuitChoice,
    classify_selection,
    resolve_selection,
)
from wpsnapshot.core.models import Site

SITES = tuple(Site(name=name, path=Path("/var/www") / name) for name in ("blog", "news", "shop"))


class TestClassifySelection(unittest.TestCase):
    def test_valid_tokens(self) -> None:
        cases = (
            ("1", IndexChoice(0)),
            (" 3 ", IndexChoice(2)),
            ("a", AllChoice()),
            ("ALL", AllChoice()),
            ("q", QuitChoice()),
            ("Quit", QuitChoice()),
        )
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(classify_selection(raw, 3), expected)

    def test_invalid_tokens(self) -> None:
        for raw in ("", "   ", "0", "4", "-1", "1.5", "blog", "x", "²", "1²"):
            with self.subTest(raw=raw):
                self.assertIsInstance(classify_selection(raw, 3), InvalidChoice)

    def test_out_of_range_reason_mentions_range(self) -> None:
        choice = classify_selection("9", 3)
        self.assertIsInstance(choice, InvalidChoice)
        self.assertIn("1-3", choice.reason)


class TestResolveSelection(unittest.TestCase):
    def _answers(self, *values: str):
        iterator = iter(values)
        return lambda: next(iterator)

    def test_index_selects_one_site(self) -> None:
        selection = resolve_selection(SITES, ask=self._answers("2"))
        self.assertEqual(selection.sites, (SITES[1],))
        self.assertFalse(selection.cancelled)

    def test_all_selects_every_site_in_order(self) -> None:
        selection = resolve_selection(SITES, ask=self._answers("a"))
        self.assertEqual(selection.sites, SITES)

    def test_quit_cancels(self) -> None:
        selection = resolve_selection(SITES, ask=self._answers("q"))
        self.assertTrue(selection.cancelled)
        self.assertEqual(selection.sites, ())

    def test_invalid_inputs_reprompt_until_valid(self) -> None:
        invalid: list[InvalidChoice] = []
        selection = resolve_selection(
            SITES,
            ask=self._answers("", "zero", "7", "3"),
            on_invalid=invalid.append,
        )
        self.assertEqual(selection.sites, (SITES[2],))
        self.assertEqual(len(invalid), 3)

    def test_superscript_digit_reprompts_instead_of_raising(self) -> None:
        invalid: list[InvalidChoice] = []
        selection = resolve_selection(
            SITES,
            ask=self._answers("²", "1"),
            on_invalid=invalid.append,
        )
        self.assertEqual(selection.sites, (SITES[0],))
        self.assertEqual(len(invalid), 1)

    def test_keyboard_interrupt_propagates(self) -> None:
        def _ask() -> str:
            raise KeyboardInterrupt

        with self.assertRaises(KeyboardInterrupt):
            resolve_selection(SITES, ask=_ask)


class TestPromptSiteSelection(unittest.TestCase):
    @mock.patch.object(select_module, "print_prompt_header")
    @mock.patch.object(select_module, "console")
    @mock.patch.object(select_module, "console_err")
    @mock.patch.object(select_module, "prompt_text", side_effect=["nope", "1"])
    def test_prompts_again_after_invalid_answer(
        self,
        prompt_text: mock.MagicMock,
        console_err: mock.MagicMock,
        _console: mock.MagicMock,
        _header: mock.MagicMock,
    ) -> None:
        selection = select_module.prompt_site_selection(SITES, root="/var/www", quiet=True)
        self.assertEqual(selection.sites, (SITES[0],))
        self.assertEqual(prompt_text.call_count, 2)
        self.assertIn("Invalid", console_err.print.call_args.args[0])
        completions = prompt_text.call_args.kwargs["completions"]
        self.assertEqual(completions, ["1", "2", "3", "a", "q"])


if __name__ == "__main__":
    unittest.main()
