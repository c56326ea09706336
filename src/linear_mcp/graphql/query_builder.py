"""Fluent builder for GraphQL queries and mutations.

A selection tree is a nested dict:

    {
        "issue": {
            "__args": {"id": "$id"},
            "__fragment": "IssueFields",
            "comments": {"nodes": {"id": True, "body": True}},
        },
    }

``True`` marks a leaf field, ``__args`` decorates a field with arguments
(values are written verbatim, so variables are passed as ``"$name"``) and
``__fragment`` spreads a named fragment. The builder does not validate
against Linear's schema; that only happens when the server executes the
document.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from graphql import DocumentNode, GraphQLSyntaxError, parse, print_ast

from ..exceptions import FragmentConflictError, QueryBuildError
from .fragments import Fragment, FragmentRegistry, default_registry, fragment_dependencies

logger = logging.getLogger(__name__)

OPERATION_TYPES = ("query", "mutation")

ARGS_KEY = "__args"
FRAGMENT_KEY = "__fragment"
_DIRECTIVE_KEYS = (ARGS_KEY, FRAGMENT_KEY)


@dataclass(frozen=True)
class VariableDefinition:
    name: str
    type: str
    required: bool = False

    def render(self) -> str:
        type_ = self.type
        if self.required and not type_.endswith("!"):
            type_ = f"{type_}!"
        return f"${self.name}: {type_}"


@dataclass(frozen=True)
class Operation:
    """A parsed GraphQL document plus the variables bound for it."""

    operation_type: str
    operation_name: str
    document: DocumentNode
    variables: Optional[Dict[str, Any]] = None
    variable_definitions: Tuple[VariableDefinition, ...] = ()
    fragments: Tuple[Fragment, ...] = ()

    @property
    def query(self) -> str:
        return print_ast(self.document)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "query": self.query,
            "operationName": self.operation_name,
        }
        if self.variables:
            payload["variables"] = self.variables
        return payload


def _copy_tree(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy_tree(v) for k, v in value.items()}
    return copy.deepcopy(value)


def _merge_selections(target: Dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _merge_selections(existing, value)
        else:
            target[key] = _copy_tree(value)


def _render_argument_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryBuilder:
    """Assembles one GraphQL operation.

    Methods return the builder so calls can be chained; ``finalize`` produces
    an immutable :class:`Operation`.
    """

    def __init__(
        self,
        operation_type: str,
        operation_name: str,
        registry: Optional[FragmentRegistry] = None,
    ):
        if operation_type not in OPERATION_TYPES:
            raise QueryBuildError(f"Unsupported operation type: {operation_type!r}")
        if not operation_name or not operation_name.strip():
            raise QueryBuildError("Operation name must not be empty")
        self.operation_type = operation_type
        self.operation_name = operation_name
        self._registry = registry if registry is not None else default_registry
        self._variables: Dict[str, VariableDefinition] = {}
        self._values: Dict[str, Any] = {}
        self._fragments: Dict[str, Fragment] = {}
        self._selections: Dict[str, Any] = {}

    @classmethod
    def query(cls, name: str, registry: Optional[FragmentRegistry] = None) -> "QueryBuilder":
        return cls("query", name, registry)

    @classmethod
    def mutation(cls, name: str, registry: Optional[FragmentRegistry] = None) -> "QueryBuilder":
        return cls("mutation", name, registry)

    # -- variables ---------------------------------------------------------

    def declare_variable(self, name: str, type_: str, required: bool = False) -> "QueryBuilder":
        """Declare ``$name``. Redeclaring a name replaces the earlier declaration."""
        self._variables[name] = VariableDefinition(name=name, type=type_, required=required)
        return self

    def bind(self, name: str, value: Any) -> "QueryBuilder":
        """Bind a value to a declared variable; undeclared names are ignored."""
        if name not in self._variables:
            logger.debug(
                "Ignoring value for undeclared variable $%s in %s",
                name,
                self.operation_name,
            )
            return self
        self._values[name] = value
        return self

    def bind_optional(self, name: str, value: Any) -> "QueryBuilder":
        """Bind ``value`` only when it is not None."""
        if value is not None:
            self.bind(name, value)
        return self

    # -- fragments ---------------------------------------------------------

    def attach_fragment(self, name: str, type_condition: str, body: str) -> "QueryBuilder":
        self._attach(Fragment(name=name, type_condition=type_condition, body=body))
        return self

    def use_fragment(self, name: str) -> "QueryBuilder":
        """Attach a registered fragment and every fragment it spreads."""
        pending = [name]
        while pending:
            fragment = self._registry.resolve(pending.pop(0))
            if self._fragments.get(fragment.name) == fragment:
                continue
            self._attach(fragment)
            pending.extend(fragment_dependencies(fragment.body))
        return self

    def _attach(self, fragment: Fragment) -> None:
        existing = self._fragments.get(fragment.name)
        if existing is None:
            self._fragments[fragment.name] = fragment
        elif existing != fragment:
            raise FragmentConflictError(
                f"Fragment {fragment.name} is already attached to "
                f"{self.operation_name} with a different definition"
            )

    # -- selections --------------------------------------------------------

    def select(self, selections: Mapping[str, Any]) -> "QueryBuilder":
        _merge_selections(self._selections, selections)
        return self

    # -- build -------------------------------------------------------------

    def finalize(self) -> Operation:
        text = self.render()
        try:
            document = parse(text)
        except GraphQLSyntaxError as exc:
            raise QueryBuildError(
                f"Invalid GraphQL document for {self.operation_name}: {exc.message}"
            ) from exc

        variables = dict(self._values) if self._values else None
        logger.debug(
            "Built %s %s (variables=%s, fragments=%s)",
            self.operation_type,
            self.operation_name,
            sorted(variables or {}),
            list(self._fragments),
        )
        return Operation(
            operation_type=self.operation_type,
            operation_name=self.operation_name,
            document=document,
            variables=variables,
            variable_definitions=tuple(self._variables.values()),
            fragments=tuple(self._fragments.values()),
        )

    def render(self) -> str:
        """Render the document text without parsing it."""
        header = f"{self.operation_type} {self.operation_name}"
        if self._variables:
            definitions = ", ".join(v.render() for v in self._variables.values())
            header = f"{header}({definitions})"

        body = self._render_selections(self._selections, "  ")
        if not body:
            raise QueryBuildError(f"Operation {self.operation_name} has no selections")

        self._check_spreads()

        parts = ["\n".join([f"{header} {{", *body, "}"])]
        parts.extend(fragment.render() for fragment in self._fragments.values())
        return "\n\n".join(parts)

    def _check_spreads(self) -> None:
        referenced = self._collect_spreads(self._selections)
        for fragment in self._fragments.values():
            referenced.extend(fragment_dependencies(fragment.body))
        missing = sorted({name for name in referenced if name not in self._fragments})
        if missing:
            raise QueryBuildError(
                f"Operation {self.operation_name} spreads unattached fragments: "
                f"{', '.join(missing)}"
            )

    def _collect_spreads(self, selections: Mapping[str, Any]) -> List[str]:
        found: List[str] = []
        for key, value in selections.items():
            if key == FRAGMENT_KEY and value:
                found.append(value)
            elif isinstance(value, Mapping) and key != ARGS_KEY:
                found.extend(self._collect_spreads(value))
        return found

    def _render_selections(self, selections: Mapping[str, Any], indent: str) -> List[str]:
        lines: List[str] = []
        for key, value in selections.items():
            if key in _DIRECTIVE_KEYS or value is False or value is None:
                continue
            if value is True:
                lines.append(f"{indent}{key}")
                continue
            if not isinstance(value, Mapping):
                raise QueryBuildError(f"Unsupported selection for {key!r}: {value!r}")

            args = value.get(ARGS_KEY) or {}
            rendered_args = ""
            if args:
                rendered_args = "(" + ", ".join(
                    f"{arg}: {_render_argument_value(arg_value)}"
                    for arg, arg_value in args.items()
                ) + ")"

            inner: List[str] = []
            spread = value.get(FRAGMENT_KEY)
            if spread:
                inner.append(f"{indent}  ...{spread}")
            inner.extend(self._render_selections(value, indent + "  "))

            if inner:
                lines.append(f"{indent}{key}{rendered_args} {{")
                lines.extend(inner)
                lines.append(f"{indent}}}")
            elif rendered_args:
                lines.append(f"{indent}{key}{rendered_args}")
            else:
                raise QueryBuildError(f"Field {key!r} has an empty selection")
        return lines
