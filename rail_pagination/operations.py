"""
Operations and the type descriptors that own them.

An ``Operation`` is a named, typed resolve function (sync or async) exposed on
a record type. A ``TypeDescriptor`` is anything that can hand out operations
by name together with the graphene type of its records; ``RecordType`` is the
concrete registry used by applications.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional

import graphene

logger = logging.getLogger(__name__)

ResolveFn = Callable[["ResolveParams"], Any]


@dataclass
class ResolveParams:
    """Everything an operation receives for one call."""

    args: Dict[str, Any] = field(default_factory=dict)
    projection: Any = None
    source: Any = None
    context: Any = None
    info: Any = None


class Operation:
    """
    A named query or mutation backed by a resolve function.

    Example:
        count = Operation("count", lambda params: len(rows), type=graphene.Int)
        total = await count.resolve(ResolveParams(args={"filter": {}}))
    """

    def __init__(
        self,
        name: str,
        resolve_fn: ResolveFn,
        type: Any = None,
        args: Optional[Dict[str, Any]] = None,
        kind: str = "query",
        description: Optional[str] = None,
    ):
        if not callable(resolve_fn):
            raise TypeError(f"Operation '{name}' needs a callable resolve function")
        self.name = name
        self.resolve_fn = resolve_fn
        self.type = type
        self.args = dict(args or {})
        self.kind = kind
        self.description = description

    async def resolve(self, params: ResolveParams) -> Any:
        result = self.resolve_fn(params)
        if inspect.isawaitable(result):
            result = await result
        return result

    def has_arg(self, name: str) -> bool:
        return name in self.args

    def get_arg_type(self, name: str) -> Any:
        """Return the declared type of an argument, unwrapping ``graphene.Argument``."""
        arg = self.args.get(name)
        if isinstance(arg, graphene.Argument):
            return arg.type
        return arg

    def clone(self, **overrides: Any) -> "Operation":
        options = {
            "name": self.name,
            "resolve_fn": self.resolve_fn,
            "type": self.type,
            "args": self.args,
            "kind": self.kind,
            "description": self.description,
        }
        options.update(overrides)
        return Operation(**options)

    def wrap_resolve(self, wrapper: Callable[[ResolveFn], ResolveFn]) -> "Operation":
        """
        Return a copy whose resolve function is ``wrapper(next_fn)``.

        The original operation is left untouched.
        """
        return self.clone(resolve_fn=wrapper(self.resolve_fn))

    def __repr__(self) -> str:
        return f"<Operation {self.kind} {self.name}>"


class TypeDescriptor(ABC):
    """Capability of a record type to expose named operations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Type name used to derive generated type names."""

    @property
    @abstractmethod
    def graphene_type(self) -> Any:
        """Graphene type describing a single record."""

    @abstractmethod
    def has_operation(self, name: str) -> bool:
        pass

    @abstractmethod
    def get_operation(self, name: str) -> Operation:
        pass


class RecordType(TypeDescriptor):
    """
    Registry of operations for a graphene object type.

    Example:
        UserType = RecordType(User)
        UserType.set_operation("count", Operation("count", count_users, type=graphene.Int))
    """

    def __init__(
        self,
        graphene_type: Any,
        name: Optional[str] = None,
        operations: Optional[Dict[str, Operation]] = None,
    ):
        self._graphene_type = graphene_type
        if name is None:
            meta = getattr(graphene_type, "_meta", None)
            name = getattr(meta, "name", None) or getattr(graphene_type, "__name__", None)
        if not name:
            raise ValueError("RecordType needs a name or a named graphene type")
        self._name = name
        self._operations: Dict[str, Operation] = dict(operations or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def graphene_type(self) -> Any:
        return self._graphene_type

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def get_operation(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise KeyError(
                f"Type {self._name} does not have operation with name '{name}'"
            ) from None

    def set_operation(self, name: str, operation: Operation) -> "RecordType":
        if name in self._operations:
            logger.debug("Replacing operation %s on %s", name, self._name)
        self._operations[name] = operation
        return self

    def remove_operation(self, name: str) -> "RecordType":
        self._operations.pop(name, None)
        return self

    def operation_names(self) -> Iterator[str]:
        return iter(self._operations)

    def __repr__(self) -> str:
        return f"<RecordType {self._name}>"
