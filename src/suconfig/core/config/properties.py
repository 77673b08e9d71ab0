"""
Typed property delegates over configuration backends.

A delegate binds a key, a default and an owning backend. Used as a class
attribute it becomes a read/write property of the owning config object;
the store is looked up through ``instance.store_for(backend)`` on every
access and nothing is cached, so two delegates for the same key always
observe the same stored value.

Delegates compose rather than inherit: :class:`GatedProperty` and
:class:`ReactiveProperty` wrap a plain delegate and add logic around it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

from .coercion import encode_int, parse_int
from .registry import Backend, Encoding, FieldMetadata
from .stores import Store
from suconfig.core.utils.logger import log_configuration_change, log_debug

T = TypeVar("T")

# A default is either a value or a function of the owning config object
DefaultSpec = Union[T, Callable[[Any], T]]


def _infer_type(value: Any) -> type:
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, str):
        return str
    raise TypeError(f"Unsupported configuration value type: {type(value).__name__}")


def _normalize(value: Any, value_type: type) -> Any:
    # IntEnum defaults are stored and returned as plain ints
    if value_type is int and not isinstance(value, bool):
        return int(value)
    return value


class Property(Generic[T]):
    """Direct delegate: the logical type is the backend's native type."""

    encoding = Encoding.NATIVE

    def __init__(
        self,
        key: str,
        default: DefaultSpec,
        backend: Backend,
        value_type: Optional[type] = None,
        choices: Optional[Iterable[Any]] = None,
        description: str = "",
    ):
        if value_type is None:
            if callable(default):
                raise TypeError(f"value_type is required for computed default of {key}")
            value_type = _infer_type(default)
        self.key = key
        self.backend = backend
        self.type = value_type
        self.choices = tuple(choices) if choices is not None else None
        self.description = description
        self.attr = key
        self._default = default

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr = name

    @property
    def metadata(self) -> FieldMetadata:
        return FieldMetadata(
            key=self.key,
            attr=self.attr,
            type=self.type,
            default=self._default,
            backend=self.backend,
            encoding=self.encoding,
            choices=self.choices,
            description=self.description,
        )

    def default_for(self, instance: Any) -> T:
        default = self._default(instance) if callable(self._default) else self._default
        return _normalize(default, self.type)

    def read(self, store: Store, default: T) -> T:
        if self.type is bool:
            return store.get_bool(self.key, default)
        if self.type is int:
            return store.get_int(self.key, default)
        return store.get_string(self.key, default)

    def write(self, store: Store, value: T) -> None:
        if self.type is bool:
            store.set_bool(self.key, bool(value))
        elif self.type is int:
            store.set_int(self.key, int(value))
        else:
            store.set_string(self.key, str(value))

    def bind(self, store: Store, default: Optional[T] = None) -> "BoundProperty[T]":
        """Standalone accessor over ``store``, outside any config object."""
        if default is None:
            if callable(self._default):
                raise TypeError(f"A concrete default is required to bind {self.key}")
            default = _normalize(self._default, self.type)
        return BoundProperty(self, store, default)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return self.read(instance.store_for(self.backend), self.default_for(instance))

    def __set__(self, instance: Any, value: T) -> None:
        self.write(instance.store_for(self.backend), value)
        log_debug("CONFIG", f"{self.key} written", self.backend.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r}, backend={self.backend.value})"


class StrIntProperty(Property[int]):
    """
    Integer delegate for stores that hold the value as a string.

    A stored string that does not parse as an integer reads as the default.
    """

    encoding = Encoding.STR_INT

    def __init__(
        self,
        key: str,
        default: DefaultSpec,
        backend: Backend = Backend.PREFS,
        choices: Optional[Iterable[Any]] = None,
        description: str = "",
    ):
        super().__init__(
            key, default, backend, value_type=int, choices=choices, description=description
        )

    def read(self, store: Store, default: int) -> int:
        parsed = parse_int(store.get_string(self.key, ""))
        return default if parsed is None else parsed

    def write(self, store: Store, value: int) -> None:
        store.set_string(self.key, encode_int(value))


class BoundProperty(Generic[T]):
    """A delegate bound to one concrete store and default."""

    def __init__(self, delegate: Property[T], store: Store, default: T):
        self.delegate = delegate
        self.store = store
        self.default = default

    @property
    def key(self) -> str:
        return self.delegate.key

    def get(self) -> T:
        return self.delegate.read(self.store, self.default)

    def set(self, value: T) -> None:
        self.delegate.write(self.store, value)


class _Wrapper:
    """Base for properties that add logic around an inner delegate."""

    def __init__(self, inner: Property):
        self.inner = inner
        self.attr = inner.attr

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr = name
        self.inner.__set_name__(owner, name)

    @property
    def key(self) -> str:
        return self.inner.key

    @property
    def backend(self) -> Backend:
        return self.inner.backend

    @property
    def metadata(self) -> FieldMetadata:
        return replace(self.inner.metadata, attr=self.attr)

    def default_for(self, instance: Any) -> Any:
        return self.inner.default_for(instance)


class GatedProperty(_Wrapper):
    """
    Boolean whose visible value is the stored flag AND a live condition.

    The condition is evaluated on every read. The setter only writes the
    stored flag.
    """

    def __init__(self, inner: Property[bool], gate: Callable[[Any], bool]):
        if inner.type is not bool:
            raise TypeError("GatedProperty requires a boolean delegate")
        super().__init__(inner)
        self.gate = gate

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return bool(self.gate(instance)) and self.inner.__get__(instance, owner)

    def __set__(self, instance: Any, value: bool) -> None:
        self.inner.__set__(instance, value)


class ReactiveProperty(_Wrapper):
    """
    Pass-through property that fires a reaction when its value changes.

    Setting the current value is a no-op. Otherwise the new value is
    written and then ``reaction(instance)`` runs synchronously, once.
    """

    def __init__(self, inner: Property, reaction: Callable[[Any], None]):
        super().__init__(inner)
        self.reaction = reaction

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return self.inner.__get__(instance, owner)

    def __set__(self, instance: Any, value: Any) -> None:
        active = instance.__dict__.setdefault("_active_reactions", set())
        if self.key in active:
            raise RuntimeError(f"Reaction for {self.key} re-entered its own setter")
        current = self.inner.__get__(instance)
        if current == value:
            return
        self.inner.__set__(instance, value)
        log_configuration_change(self.key, current, value)
        active.add(self.key)
        try:
            self.reaction(instance)
        finally:
            active.discard(self.key)


def preference(key: str, default: DefaultSpec, **kwargs: Any) -> Property:
    """Delegate over the local preference store."""
    return Property(key, default, Backend.PREFS, **kwargs)


def preference_str_int(key: str, default: DefaultSpec, **kwargs: Any) -> StrIntProperty:
    """Integer delegate over the local preference store, stored as a string."""
    return StrIntProperty(key, default, Backend.PREFS, **kwargs)


def db_settings(key: str, default: DefaultSpec, **kwargs: Any) -> Property:
    """Integer or boolean delegate over the settings store."""
    return Property(key, default, Backend.SETTINGS, **kwargs)


def db_strings(key: str, default: str, **kwargs: Any) -> Property:
    """String delegate over the settings store."""
    return Property(key, default, Backend.SETTINGS, value_type=str, **kwargs)
