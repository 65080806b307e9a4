"""Frame-based knowledge store."""

from typing import Any

from .models import Frame

CLASSES_KEY = "__classes__"
SUBJECT_KEY = "__subject__"

# Returned verbatim when the discourse subject was never set.
UNSET_SUBJECT = "nothing"

SUBJECT_SWAPS = {"you": "me", "me": "you"}


class MemoryStore:
    """In-memory fact base: object frames plus the discourse subject.

    Object and property names are matched case-insensitively but stored
    with the spelling they were first recorded with.
    """

    def __init__(self) -> None:
        self._frames: dict[str, Frame] = {}
        self._index: dict[str, str] = {}
        self._subject: str | None = None

    def __len__(self) -> int:
        return len(self._frames)

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._index

    @property
    def frames(self) -> list[Frame]:
        return list(self._frames.values())

    def get(self, name: str) -> Frame | None:
        """Get a frame by name, ignoring case."""
        key = self._index.get(name.casefold())
        return None if key is None else self._frames[key]

    def ensure(self, name: str) -> Frame:
        """Get a frame, creating it on first mention."""
        frame = self.get(name)
        if frame is None:
            frame = Frame(name=name)
            self._frames[name] = frame
            self._index[name.casefold()] = name
        return frame

    def classes_of(self, name: str) -> list[str]:
        frame = self.get(name)
        return [] if frame is None else list(frame.classes)

    def add_class(self, name: str, class_name: str) -> Frame:
        """Record "name is a class_name". Always appends."""
        frame = self.ensure(name)
        frame.classes.append(class_name)
        return frame

    def link(self, name: str, value: str) -> str | None:
        """Record "name is value" through the first class of value.

        The property key is value's first class, read now. When value has
        no class nothing is written (the object frame is still created).

        Returns:
            The property key written, or None.
        """
        frame = self.ensure(name)
        value_classes = self.classes_of(value)
        if not value_classes:
            return None

        prop = value_classes[0]
        key = frame.property_key(prop) or prop
        frame.properties.setdefault(key, []).append(value)
        return key

    def set_quantity(self, name: str, prop: str, amount: str) -> None:
        """Record "name has amount prop". Overwrites previous amounts."""
        frame = self.ensure(name)
        key = frame.property_key(prop) or prop
        frame.properties[key] = [amount]

    def property_values(self, name: str, prop: str) -> list[str] | None:
        frame = self.get(name)
        if frame is None:
            return None
        values = frame.get_property(prop)
        return None if values is None else list(values)

    @property
    def subject(self) -> str:
        """Current discourse subject, or UNSET_SUBJECT."""
        return UNSET_SUBJECT if self._subject is None else self._subject

    @property
    def has_subject(self) -> bool:
        return self._subject is not None

    def set_subject(self, topic: str) -> str:
        """Set the subject, swapping first and second person.

        "you" becomes "me" and "me" becomes "you", relative to the current
        subject: asking to talk about "you" twice in a row swaps back.
        """
        swapped = SUBJECT_SWAPS.get(topic.lower())
        if swapped is None:
            self._subject = topic
        elif self._subject is not None and self._subject.lower() == swapped:
            self._subject = topic.lower()
        else:
            self._subject = swapped
        return self._subject

    def to_document(self) -> dict[str, Any]:
        """Serialize to the persisted document layout."""
        document: dict[str, Any] = {}
        for name, frame in self._frames.items():
            entry: dict[str, Any] = {}
            if frame.classes:
                entry[CLASSES_KEY] = list(frame.classes)
            for prop, values in frame.properties.items():
                entry[prop] = list(values)
            document[name] = entry
        if self._subject is not None:
            document[SUBJECT_KEY] = self._subject
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "MemoryStore":
        """Rebuild a store from a persisted document.

        Scalar property values written by older versions are wrapped into
        one-element lists.
        """
        store = cls()
        for name, entry in document.items():
            if name == SUBJECT_KEY:
                if isinstance(entry, str) and entry:
                    store._subject = entry
                continue
            if not isinstance(entry, dict):
                continue

            frame = store.ensure(name)
            for key, value in entry.items():
                values = [str(v) for v in value] if isinstance(value, list) else [str(value)]
                if key == CLASSES_KEY:
                    frame.classes.extend(values)
                else:
                    frame.properties[key] = values
        return store
