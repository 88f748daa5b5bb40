"""
Core implementation of :mod:`textplot.api`.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Optional

log = logging.getLogger(__name__)

__all__ = [
    "AllTracker",
    "public_module_prefix",
]


#
# Classes
#


class AllTracker:
    """
    Check that a private module exports exactly the public names it defines.

    All public classes and functions of ``textplot`` live in private modules, e.g.
    ``textplot.chart._chart``, and are re-exported by the public package one level
    up using ``from ._chart import *``.
    A tracker created in the private module right after its imports sees every
    global defined after that point; names not starting with an underscore must be
    listed in ``__all__``:

    .. code-block:: python

        __all__ = ["Scale"]

        __tracker = AllTracker(globals())

        class Scale:
            ...

        __tracker.validate()

    Validation also records the public package in attribute ``__publicmodule__`` of
    each exported object.
    """

    #: the public package re-exporting the tracked names
    public_module: str

    #: if ``True``, allow exporting global constants, which have no ``__module__``
    allow_global_constants: bool

    def __init__(
        self,
        globals_: Dict[str, Any],
        *,
        public_module: Optional[str] = None,
        allow_global_constants: bool = False,
    ) -> None:
        """
        :param globals_: the global namespace of the tracked module, obtained by
            calling :func:`globals`
        :param public_module: the public package re-exporting the tracked names
            (default: derived from the name of the tracked module)
        :param allow_global_constants: if ``True``, allow exporting global constants
            (default: ``False``)
        """
        module: Optional[str] = globals_.get("__name__")
        if module is None:
            raise ValueError("arg globals_ does not define module name in __name__")

        self._globals = globals_
        self._module = module
        self._untracked: FrozenSet[str] = frozenset(globals_)

        self.public_module = public_module or public_module_prefix(module)
        self.allow_global_constants = allow_global_constants

    def validate(self) -> None:
        """
        Check ``__all__`` against the public names defined since this tracker was
        created, and tag the exported objects with their public module.

        :raise AssertionError: ``__all__`` does not list exactly the tracked names,
            or an exported object was defined in another module
        """
        tracked = self.get_tracked()
        declared = list(self._globals.get("__all__", []))

        if sorted(set(declared)) != tracked:
            raise AssertionError(
                f"__all__ of module {self._module} must list exactly the names "
                f"{tracked} but lists {declared}"
            )

        for name in tracked:
            self._tag(name, self._globals[name])

    def get_tracked(self) -> List[str]:
        """
        Get the public names defined since this tracker was created.

        :return: the tracked names in alphabetical order
        """
        return sorted(
            name
            for name in self._globals
            if not name.startswith("_") and name not in self._untracked
        )

    def _tag(self, name: str, obj: Any) -> None:
        defined_in: Optional[str] = getattr(obj, "__module__", None)

        if defined_in is None:
            if not self.allow_global_constants:
                raise AssertionError(
                    f"exporting a global constant is not permitted: {name}={obj!r}"
                )
        elif defined_in != self._module:
            raise AssertionError(
                f"{name} is exported by module {self._module} "
                f"but defined in module {defined_in}"
            )
        else:
            try:
                obj.__publicmodule__ = self.public_module
            except AttributeError:
                log.debug(f"cannot tag {name} with its public module")


#
# Functions
#


def public_module_prefix(module_name: str) -> str:
    """
    Get the public part of a module name: all components up to, and excluding, the
    first component starting with an underscore.

    >>> public_module_prefix("textplot.chart._chart")
    'textplot.chart'

    :param module_name: the full name of a module
    :return: the public part of the module name
    :raise ValueError: the first component of the module name is private
    """
    public: List[str] = []
    for component in module_name.split("."):
        if component.startswith("_"):
            break
        public.append(component)

    if not public:
        raise ValueError(f"cannot infer public module path from module {module_name}")

    return ".".join(public)
