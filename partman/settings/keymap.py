"""Key chords, bindable actions and the keybinding table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from partman.errors import InvalidChordSyntaxError, UnknownActionNameError
from partman.observability.logging import get_logger

logger = get_logger(__name__)


class BindableMessage(Enum):
    """Symbolic actions a chord may be bound to."""

    LOGIN = "Login"
    SELECT_PROFILE = "SelectProfile"
    IMPORT_TAB = "ImportTab"
    SEARCH_TAB = "SearchTab"
    QUIT = "Quit"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: str) -> "BindableMessage":
        """Look up an action by its exact, case-sensitive name."""
        try:
            return cls(name)
        except ValueError:
            raise UnknownActionNameError(
                message=f"Unknown action name {name!r}",
                name=name,
                choices=cls.names(),
            ) from None


class Modifier(Enum):
    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"
    SUPER = "super"


# Canonical order used when printing chords
MODIFIER_ORDER: Tuple[Modifier, ...] = (Modifier.CTRL, Modifier.ALT, Modifier.SHIFT, Modifier.SUPER)

MODIFIER_ALIASES: Dict[str, Modifier] = {
    "ctrl": Modifier.CTRL,
    "control": Modifier.CTRL,
    "alt": Modifier.ALT,
    "option": Modifier.ALT,
    "shift": Modifier.SHIFT,
    "super": Modifier.SUPER,
    "cmd": Modifier.SUPER,
    "meta": Modifier.SUPER,
    "win": Modifier.SUPER,
}

KEY_ALIASES: Dict[str, str] = {
    "enter": "enter",
    "return": "enter",
    "esc": "esc",
    "escape": "esc",
    "tab": "tab",
    "space": "space",
    "backspace": "backspace",
    "delete": "delete",
    "del": "delete",
    "insert": "insert",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pagedown": "pagedown",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
}
KEY_ALIASES.update({f"f{n}": f"f{n}" for n in range(1, 25)})


def normalize_key(key: str, spec: Optional[str] = None) -> str:
    """Return the canonical spelling of a single key name.

    Raises:
        InvalidChordSyntaxError: If ``key`` is empty or not a known key.
    """
    text = spec if spec is not None else key
    if not key:
        raise InvalidChordSyntaxError(message=f"Chord {text!r} has no key", text=text)
    if key == " ":
        return "space"
    if len(key) == 1:
        if not key.isprintable() or key.isspace():
            raise InvalidChordSyntaxError(message=f"Chord {text!r} uses an unprintable key", text=text)
        return key.lower()
    lowered = key.lower()
    if lowered in KEY_ALIASES:
        return KEY_ALIASES[lowered]
    if lowered in MODIFIER_ALIASES:
        raise InvalidChordSyntaxError(
            message=f"Chord {text!r} has modifiers but no key",
            text=text,
        )
    raise InvalidChordSyntaxError(message=f"Unknown key {key!r} in chord {text!r}", text=text)


def normalize_modifier(name: str, spec: Optional[str] = None) -> Modifier:
    text = spec if spec is not None else name
    if not name:
        raise InvalidChordSyntaxError(message=f"Chord {text!r} has an empty segment", text=text)
    modifier = MODIFIER_ALIASES.get(name.lower())
    if modifier is None:
        raise InvalidChordSyntaxError(message=f"Unknown modifier {name!r} in chord {text!r}", text=text)
    return modifier


@dataclass(frozen=True)
class Chord:
    """A key plus the modifiers held with it."""

    key: str
    modifiers: FrozenSet[Modifier] = field(default_factory=frozenset)

    def __str__(self) -> str:
        parts = [modifier.value for modifier in MODIFIER_ORDER if modifier in self.modifiers]
        parts.append(self.key)
        return "+".join(parts)

    @classmethod
    def parse(cls, spec: str) -> "Chord":
        """Parse a chord specification such as ``"ctrl+q"``.

        Modifier and named-key spellings are case-insensitive. A literal
        ``+`` key is written as a trailing ``++``.

        Raises:
            InvalidChordSyntaxError: If the specification is malformed.
        """
        if not spec:
            raise InvalidChordSyntaxError(message="Chord specification is empty", text=spec)

        if spec == "+" or spec.endswith("++"):
            head = spec[:-2] if spec != "+" else ""
            parts = head.split("+") if head else []
            key = "+"
        else:
            *parts, key = spec.split("+")

        modifiers = set()
        for part in parts:
            modifier = normalize_modifier(part, spec)
            if modifier in modifiers:
                raise InvalidChordSyntaxError(
                    message=f"Modifier {part!r} repeated in chord {spec!r}",
                    text=spec,
                )
            modifiers.add(modifier)

        return cls(key=normalize_key(key, spec), modifiers=frozenset(modifiers))

    @classmethod
    def from_parts(cls, key: str, modifiers: Iterable[Union[str, Modifier]] = ()) -> "Chord":
        """Build a chord from a raw key name and modifier names."""
        resolved = frozenset(
            modifier if isinstance(modifier, Modifier) else normalize_modifier(modifier)
            for modifier in modifiers
        )
        return cls(key=normalize_key(key), modifiers=resolved)


ChordLike = Union[Chord, str]


def _as_chord(chord: ChordLike) -> Chord:
    return chord if isinstance(chord, Chord) else Chord.parse(chord)


class Keybinds:
    """Insertion-ordered table of chord -> :class:`BindableMessage`.

    Binding a chord that is already bound replaces its action and keeps its
    original position.
    """

    def __init__(self, bindings: Optional[Iterable[Tuple[ChordLike, BindableMessage]]] = None):
        self._bindings: Dict[Chord, BindableMessage] = {}
        for chord, action in bindings or ():
            self.bind(chord, action)

    def bind(self, chord: ChordLike, action: BindableMessage) -> Chord:
        resolved = _as_chord(chord)
        previous = self._bindings.get(resolved)
        if previous is not None and previous is not action:
            logger.warning(
                "Chord %s rebound from %s to %s", resolved, previous.value, action.value
            )
        self._bindings[resolved] = action
        return resolved

    def lookup(self, chord: ChordLike) -> Optional[BindableMessage]:
        return self._bindings.get(_as_chord(chord))

    def dispatch(self, event) -> Optional[BindableMessage]:
        """Resolve a key event (anything with ``key`` and ``modifiers``)."""
        try:
            chord = Chord.from_parts(event.key, event.modifiers)
        except InvalidChordSyntaxError:
            # Keys we cannot name are never bound
            return None
        return self._bindings.get(chord)

    def as_dict(self) -> Dict[str, BindableMessage]:
        return {str(chord): action for chord, action in self._bindings.items()}

    def items(self) -> List[Tuple[Chord, BindableMessage]]:
        return list(self._bindings.items())

    def __contains__(self, chord: object) -> bool:
        if isinstance(chord, (Chord, str)):
            try:
                return _as_chord(chord) in self._bindings
            except InvalidChordSyntaxError:
                return False
        return False

    def __iter__(self) -> Iterator[Chord]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keybinds):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"Keybinds({self.as_dict()!r})"


__all__ = [
    "BindableMessage",
    "Chord",
    "Keybinds",
    "Modifier",
    "normalize_key",
    "normalize_modifier",
]
