"""
Parameter Registry.

Central storage for runtime parameters. A ParamRegistry knows which
parameters the program declared (name, kind, default, description) and
which values were supplied at run time by parameter files or the command
line. Values are resolved with the priority

    command line / parameter file  >  set_default()  >  declared default

Lifecycle
---------
A registry starts open for registration. Every component registers the
parameters it may use, then the host program calls end_registration(),
which closes the registry for good and resolves each parameter once so
that malformed values are reported at start-up rather than at first use.
Only then may values be queried:

    from simparams.params import REGISTRY, ParamDef

    EndTime = ParamDef("EndTime", 1e3)

    REGISTRY.register(EndTime, "The simulation time at which the run stops")
    REGISTRY.end_registration()
    t_end = REGISTRY.get(EndTime)

reset() reopens an empty registry (tests, re-initialization).

Thread Safety
-------------
There is no internal locking. All registration must happen on a single
thread before end_registration(); callers that register from several
threads must synchronize externally. After end_registration() concurrent
reads are safe, except that set_default() must not race with get().
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

from .errors import (
    AlreadyClosedError,
    ConflictingRegistrationError,
    RegistrationClosedError,
    RegistrationOpenError,
    UnknownParameterError,
    unknown_param_error,
)
from .schema import ParamDef, ParamInfo, ParamKind
from .suggest import suggest_similar
from .tree import ParameterTree, get_flattened_key_list


class ParamRegistry:
    """
    Registry of runtime parameters and the values supplied for them.

    Attributes:
        _params: Dictionary mapping canonical names to ParamInfo records.
        _tree: Values supplied at run time, keyed by canonical name.
        _pending: Parameters to resolve once when registration ends.
        _open: Whether parameters may still be registered.
    """

    def __init__(self):
        """Initialize an empty registry, open for registration."""
        self._params: Dict[str, ParamInfo] = {}
        self._tree: ParameterTree = ParameterTree()
        self._pending: List[ParamDef] = []
        self._open: bool = True

    def reset(self) -> None:
        """Discard all registrations and values and reopen registration."""
        self._params = {}
        self._tree = ParameterTree()
        self._pending = []
        self._open = True

    @property
    def registration_open(self) -> bool:
        return self._open

    @property
    def params(self) -> Mapping[str, ParamInfo]:
        """
        Get all registered parameters.

        Returns:
            Mapping of canonical names to ParamInfo records. Read-only once
            registration has ended.
        """
        if self._open:
            return self._params
        return MappingProxyType(self._params)

    @property
    def tree(self) -> ParameterTree:
        """The store of values supplied at run time."""
        return self._tree

    def __contains__(self, param: Union[ParamDef, str]) -> bool:
        return _name_of(param) in self._params

    def __len__(self) -> int:
        return len(self._params)

    def suggest(self, name: str) -> List[str]:
        """Registered names similar to name, best match first."""
        return suggest_similar(name, self._params.keys())

    def _unknown(self, name: str) -> UnknownParameterError:
        return UnknownParameterError(
            f"Accessing parameter '{name}' without prior registration is not allowed. "
            f"{unknown_param_error(name, self.suggest(name))}"
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, param: ParamDef, usage: str) -> None:
        """
        Register a parameter.

        A parameter may be registered more than once (e.g. by several
        components that use it) as long as its name, kind, type tag and
        usage string are identical.

        Args:
            param: The parameter declaration.
            usage: Description shown in the help message.

        Raises:
            RegistrationClosedError: If end_registration() was already called.
            ConflictingRegistrationError: If the name is registered with
                different characteristics.
        """
        if not self._open:
            raise RegistrationClosedError(
                f"Parameter registration was already closed before the parameter "
                f"'{param.name}' was registered."
            )

        info = ParamInfo(
            name=param.name,
            kind=param.kind,
            usage=usage,
            default_value=param.kind.serialize(param.default),
            type_tag=param.type_tag,
        )

        existing = self._params.get(param.name)
        if existing is not None:
            if existing == info:
                return
            raise ConflictingRegistrationError(
                f"Parameter '{param.name}' registered twice with non-matching characteristics."
            )

        self._params[param.name] = info
        self._pending.append(param)

    def hide(self, param: ParamDef) -> None:
        """
        Leave a registered parameter out of the default help message.

        Hidden parameters can still be set and queried.

        Raises:
            RegistrationClosedError: If end_registration() was already called.
            UnknownParameterError: If the parameter is not registered.
        """
        if not self._open:
            raise RegistrationClosedError(
                f"Parameter '{param.name}' declared as hidden when parameter "
                "registration was already closed."
            )

        info = self._params.get(param.name)
        if info is None:
            raise UnknownParameterError(f"Tried to declare unknown parameter '{param.name}' hidden.")

        info.is_hidden = True

    def end_registration(self) -> None:
        """
        Close registration and validate the value of every parameter.

        Raises:
            AlreadyClosedError: If registration was already closed.
            ValueParseError: If a supplied value does not match the kind of
                its parameter.
        """
        if not self._open:
            raise AlreadyClosedError(
                "Parameter registration was already closed. It is only possible to close it once."
            )

        self._open = False

        pending, self._pending = self._pending, []
        for param in pending:
            self.get(param)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _check_queryable(self, param: ParamDef, error_if_not_registered: bool) -> None:
        if not error_if_not_registered:
            return

        if self._open:
            raise RegistrationOpenError(
                "Parameters can only be retrieved after all of them have been registered."
            )

        if param.name not in self._params:
            raise self._unknown(param.name)

    def is_set(self, param: ParamDef, error_if_not_registered: bool = True) -> bool:
        """
        Return whether a value for the parameter was supplied at run time.

        Raises:
            RegistrationOpenError: If error_if_not_registered and registration
                is still open.
            UnknownParameterError: If error_if_not_registered and the
                parameter is not registered.
        """
        self._check_queryable(param, error_if_not_registered)

        return self._tree.has_key(param.name)

    def get(self, param: ParamDef, error_if_not_registered: bool = True) -> Any:
        """
        Resolve the value of a parameter.

        The run-time supplied value wins; otherwise the registered default
        (as changed by set_default()) is returned. Flags resolve to whether
        they were supplied.

        Raises:
            RegistrationOpenError: If error_if_not_registered and registration
                is still open.
            UnknownParameterError: If error_if_not_registered and the
                parameter is not registered.
            ValueParseError: If the supplied value does not match the kind.
            ConflictingRegistrationError: If the parameter is registered with
                a different kind.
        """
        self._check_queryable(param, error_if_not_registered)

        kind = param.kind
        info = self._params.get(param.name)
        if info is not None:
            _check_kind(param, info)

        if kind is ParamKind.FLAG:
            return self._tree.has_key(param.name)

        if info is not None:
            default = kind.parse_default(info.default_value, param.name)
        else:
            default = kind.parse_default(kind.serialize(param.default), param.name)

        text = self._tree.get(param.name)
        if text is None:
            return default

        return kind.parse(text, param.name)

    def set_default(self, param: ParamDef, value: Any) -> None:
        """
        Replace the default of a registered parameter.

        Allowed before and after end_registration(). Values supplied at run
        time still take precedence.

        Raises:
            UnknownParameterError: If the parameter is not registered.
            ValueParseError: If value is not a valid value of the kind.
            ConflictingRegistrationError: If the parameter is registered with
                a different kind.
        """
        info = self._params.get(param.name)
        if info is None:
            raise self._unknown(param.name)
        _check_kind(param, info)

        text = param.kind.serialize(value)
        # reject values that get() could not read back
        param.kind.parse(text, param.name)

        info.default_value = text

    def get_lists(self) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
        """
        Split the run-time supplied values into used and unused ones.

        Returns:
            Tuple of (used, unused) lists of (key, value) pairs. A key is used
            if a parameter of that name is registered.

        Raises:
            RegistrationOpenError: If registration is still open.
        """
        if self._open:
            raise RegistrationOpenError(
                "Parameter lists can only be retrieved after all of them have been registered."
            )

        used, unused = [], []
        for key in get_flattened_key_list(self._tree):
            entry = (key, self._tree[key])
            if key in self._params:
                used.append(entry)
            else:
                unused.append(entry)

        return used, unused

    def set_value(self, key: str, value: str) -> None:
        """Store a run-time supplied value under a canonical key."""
        self._tree[key] = value


def _check_kind(param: ParamDef, info: ParamInfo) -> None:
    if info.kind is not param.kind:
        raise ConflictingRegistrationError(
            f"Parameter '{param.name}' used as {param.kind.name} but registered as {info.kind.name}."
        )


def _name_of(param: Union[ParamDef, str]) -> str:
    if isinstance(param, ParamDef):
        return param.name
    return param


# Process-wide registry for programs that do not manage their own
REGISTRY = ParamRegistry()
