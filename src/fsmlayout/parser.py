"""
Parser module for state machine descriptions.

Handles parsing of input text into a StateMachine. The format is line based:

    # comments and blank lines are ignored
    alphabet: 0 1
    states: 3
    initial: 0
    accept: 1 2
    0 -0-> 1
    0 -1-> 0

Directives are optional. Without ``alphabet`` the sorted set of symbols used
by the transitions is taken; without ``states`` the highest state mentioned
determines the count.
"""

import re
from typing import Dict, List, Optional, Set, Tuple

from .models import FSMLayoutError, StateMachine, TransitionError


class ParseError(FSMLayoutError):
    """Raised when input parsing fails."""

    pass


class Parser:
    """Parses state machine descriptions into StateMachine objects."""

    DIRECTIVE_PATTERN = re.compile(r"^\s*(alphabet|states|initial|accept)\s*:(.*)$")
    TRANSITION_PATTERN = re.compile(
        r"^\s*(?P<src>\d+)\s*-(?P<symbol>[^\s>]+?)->\s*(?P<dst>\d+)\s*$"
    )

    def parse(self, input_text: str) -> StateMachine:
        """
        Parse input text and return a validated machine.

        Args:
            input_text: Multi-line description, see module docstring.

        Returns:
            StateMachine

        Raises:
            ParseError: If the input format is invalid or the resulting
                transition table is incomplete.
        """
        alphabet: Optional[Tuple[str, ...]] = None
        num_states: Optional[int] = None
        initial = 0
        accept: Set[int] = set()
        transitions: Dict[Tuple[int, str], int] = {}

        for line_num, line in enumerate(input_text.strip().split("\n"), 1):
            stripped = line.strip()

            # Skip empty lines and comments
            if not stripped or stripped.startswith("#"):
                continue

            directive = self.DIRECTIVE_PATTERN.match(stripped)
            if directive:
                name, value = directive.group(1), directive.group(2).split()
                if name == "alphabet":
                    if not value:
                        raise ParseError(f"Line {line_num}: Empty alphabet")
                    alphabet = tuple(value)
                elif name == "accept":
                    accept.update(self._parse_states(value, line_num))
                else:
                    states = self._parse_states(value, line_num)
                    if len(states) != 1:
                        raise ParseError(
                            f"Line {line_num}: Expected one number for '{name}'"
                        )
                    if name == "states":
                        num_states = states[0]
                    else:
                        initial = states[0]
                continue

            match = self.TRANSITION_PATTERN.match(stripped)
            if not match:
                raise ParseError(
                    f"Line {line_num}: Expected 'SRC -SYMBOL-> DST': {stripped}"
                )

            key = (int(match.group("src")), match.group("symbol"))
            if key in transitions:
                raise ParseError(
                    f"Line {line_num}: Duplicate transition for state {key[0]} "
                    f"on symbol '{key[1]}'"
                )
            transitions[key] = int(match.group("dst"))

        if not transitions:
            raise ParseError("No transitions found in input")

        if alphabet is None:
            alphabet = tuple(sorted({symbol for _, symbol in transitions}))
        if num_states is None:
            mentioned = [src for src, _ in transitions] + list(transitions.values())
            num_states = max(mentioned) + 1

        table: List[Dict[str, int]] = [{} for _ in range(num_states)]
        for (src, symbol), dst in transitions.items():
            if src >= num_states:
                raise ParseError(f"Transition source {src} exceeds {num_states} states")
            if symbol not in alphabet:
                raise ParseError(f"Symbol '{symbol}' is not in the alphabet")
            table[src][symbol] = dst

        machine = StateMachine(num_states, table, initial, accept, alphabet)
        try:
            machine.validate()
        except TransitionError as exc:
            raise ParseError(str(exc)) from exc
        return machine

    def _parse_states(self, values: List[str], line_num: int) -> List[int]:
        try:
            return [int(value) for value in values]
        except ValueError:
            raise ParseError(
                f"Line {line_num}: Expected state numbers, got {' '.join(values)}"
            ) from None


def parse_machine(input_text: str) -> StateMachine:
    """
    Convenience function to parse a machine description.

    Args:
        input_text: Multi-line description

    Returns:
        StateMachine
    """
    parser = Parser()
    return parser.parse(input_text)
