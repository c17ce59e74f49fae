# hostbind/core/bundle.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from hostbind.core.args import UNDEFINED, Arg
from hostbind.core.errors import (
    DuplicateBindingError,
    TooManyPositionalArgumentsError,
    UnknownKeywordArgumentError,
)


@dataclass(frozen=True)
class ArgSchema:
    """
    Immutable description of the parameters accepted by one exposed function.

    Parameters are laid out as:
        required positional-or-keyword names (``n_required`` of them),
        optional positional-or-keyword names,
        keyword-only names (``n_kwdonly`` of them, at the end).
    Every declared name may also be passed by keyword.

    Attributes:
        name: Function name shown to the host.
        arg_names: Ordered parameter names.
        n_required: Number of leading required parameters.
        n_kwdonly: Number of trailing keyword-only parameters.
        has_varargs: Whether surplus positional values are collected.
        has_varkwds: Whether unknown keywords are collected.
        description: Free-form documentation text.
    """

    name: str
    arg_names: Tuple[str, ...] = ()
    n_required: int = 0
    n_kwdonly: int = 0
    has_varargs: bool = False
    has_varkwds: bool = False
    description: str = ""
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = tuple(self.arg_names)
        object.__setattr__(self, "arg_names", names)
        if not self.name.isidentifier():
            raise ValueError(f"Invalid function name: {self.name!r}")
        for argname in names:
            if not isinstance(argname, str) or not argname.isidentifier():
                raise ValueError(f"Invalid parameter name {argname!r} in {self.name}()")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate parameter names in {self.name}()")
        if self.n_required < 0 or self.n_kwdonly < 0:
            raise ValueError(f"Parameter counts of {self.name}() cannot be negative")
        if self.n_required + self.n_kwdonly > len(names):
            raise ValueError(
                f"{self.name}() declares {len(names)} parameters, but {self.n_required} required "
                f"and {self.n_kwdonly} keyword-only"
            )
        object.__setattr__(self, "_index", {argname: i for i, argname in enumerate(names)})

    @property
    def arity(self) -> int:
        return len(self.arg_names)

    @property
    def n_positional(self) -> int:
        """Maximum number of non-variadic positional values."""
        return len(self.arg_names) - self.n_kwdonly

    def index_of(self, argname: str) -> Optional[int]:
        return self._index.get(argname)

    @property
    def signature(self) -> str:
        parts: List[str] = []
        for i, argname in enumerate(self.arg_names[: self.n_positional]):
            parts.append(argname if i < self.n_required else f"{argname}=None")
        if self.has_varargs:
            parts.append("*args")
        elif self.n_kwdonly:
            parts.append("*")
        parts.extend(f"{argname}=None" for argname in self.arg_names[self.n_positional :])
        if self.has_varkwds:
            parts.append("**kwargs")
        return ", ".join(parts)

    @property
    def doc(self) -> str:
        """Help text in the ``name(signature)\\n--\\n\\n<description>`` form."""
        return f"{self.name}({self.signature})\n--\n\n{inspect.cleandoc(self.description)}\n"

    def bind(self, args: Sequence[Any] = (), kwargs: Optional[Mapping[str, Any]] = None, context: Any = None) -> "ArgBundle":
        """
        Bind the raw call payload against this schema.

        :param args: Positional values, in order.
        :param kwargs: Keyword values.
        :param context: The module context the call is executed in; descriptors
            reach the registration table through it.
        :return: A fully bound ArgBundle.
        :raises TooManyPositionalArgumentsError: More positional values than
            the schema accepts and no varargs.
        :raises UnknownKeywordArgumentError: An undeclared keyword and no varkwds.
        :raises DuplicateBindingError: A name received both a positional and a
            keyword value.
        """
        kwargs = kwargs or {}
        nargs = len(args)
        npos = self.n_positional
        if nargs > npos and not self.has_varargs:
            raise TooManyPositionalArgumentsError(
                f"{self.name}() takes at most {npos} positional argument{'' if npos == 1 else 's'}, "
                f"but {nargs} were given",
                {"function": self.name, "max_positional": npos, "given": nargs},
            )

        values: List[Any] = [UNDEFINED] * self.arity
        values[: min(nargs, npos)] = args[:npos]
        varargs = tuple(args[npos:])
        varkwds: Dict[str, Any] = {}

        for key, value in kwargs.items():
            i = self._index.get(key)
            if i is None:
                if not self.has_varkwds:
                    raise UnknownKeywordArgumentError(
                        f"{self.name}() got an unexpected keyword argument `{key}`",
                        {"function": self.name, "param": key},
                    )
                varkwds[key] = value
            elif values[i] is not UNDEFINED:
                raise DuplicateBindingError(
                    f"{self.name}() got multiple values for argument `{key}`",
                    {"function": self.name, "param": key},
                )
            else:
                values[i] = value

        return ArgBundle(self, values, varargs, varkwds, context)


class ArgBundle:
    """
    The bound parameters of a single call.

    Created by :meth:`ArgSchema.bind` and discarded when the call returns.
    Descriptors can be looked up by position or by parameter name; surplus
    values are only reachable through ``varargs`` and ``varkwds``.
    """

    def __init__(
        self,
        schema: ArgSchema,
        values: Sequence[Any],
        varargs: Tuple[Any, ...] = (),
        varkwds: Optional[Dict[str, Any]] = None,
        context: Any = None,
    ) -> None:
        self.schema = schema
        self.context = context
        self._args = [Arg(i, self, value) for i, value in enumerate(values)]
        self._varargs = varargs
        self._varkwds = varkwds or {}

    @property
    def name(self) -> str:
        return self.schema.name

    @property
    def doc(self) -> str:
        return self.schema.doc

    @property
    def varargs(self) -> Tuple[Any, ...]:
        return self._varargs

    @property
    def varkwds(self) -> Dict[str, Any]:
        return dict(self._varkwds)

    def __len__(self) -> int:
        return len(self._args)

    def __iter__(self) -> Iterator[Arg]:
        return iter(self._args)

    def __getitem__(self, key: Union[int, str]) -> Arg:
        if isinstance(key, str):
            i = self.schema.index_of(key)
            if i is None:
                raise KeyError(f"{self.name}() has no parameter `{key}`")
            return self._args[i]
        return self._args[key]

    def num_vararg_args(self) -> int:
        return len(self._varargs)

    def __repr__(self) -> str:
        return f"ArgBundle({self.name}, {self._args!r})"
