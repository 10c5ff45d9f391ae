"""
Transformation Registry.

Maps stable rule identifiers to concrete tree transformations. The registry is
assembled with a `RegistryBuilder` before any file is processed and then frozen
into a `TransformationRegistry`, which is passed explicitly to the processor.
There is no process-wide registry state.

Usage:

.. code-block:: python

    builder = RegistryBuilder()

    @builder.transformation("return_spacing")
    class ReturnSpacing(cst.CSTTransformer):
      ...

    registry = builder.build()
    registry.resolve("return_spacing").apply(module)
"""

from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Protocol, Tuple, Type, TypeVar, Union, runtime_checkable

import libcst as cst

from cst_insights.errors import ConfigurationError, TransformError

TransformerFactory = Callable[[], cst.CSTTransformer]
T = TypeVar("T")


@runtime_checkable
class Transformation(Protocol):
  """
  A pure function over tree structure.

  Implementations receive the working tree and return the post-transformation
  tree (the same module if nothing changed). They may raise.
  """

  def apply(self, module: cst.Module) -> cst.Module: ...


class VisitorTransformation:
  """
  Adapts a `libcst.CSTTransformer` into a `Transformation`.

  A fresh transformer is built for every application so that visitor state
  never carries over between files or rules.
  """

  def __init__(self, factory: TransformerFactory) -> None:
    """
    Args:
        factory: A `CSTTransformer` subclass or zero-argument callable
            returning a transformer instance.
    """
    self.factory = factory

  def apply(self, module: cst.Module) -> cst.Module:
    """
    Traverses `module` with a new transformer instance.

    Args:
        module: The working tree.

    Returns:
        cst.Module: The transformed tree.
    """
    return module.visit(self.factory())

  def __repr__(self) -> str:
    name = getattr(self.factory, "__name__", repr(self.factory))
    return f"VisitorTransformation({name})"


def as_transformation(candidate: Union[Transformation, Type[cst.CSTTransformer]]) -> Transformation:
  """
  Normalises a transformer class or transformation object into a `Transformation`.

  Args:
      candidate: Either an object exposing `apply(module)` or a
          `CSTTransformer` subclass.

  Returns:
      Transformation: The normalised transformation.

  Raises:
      ConfigurationError: If `candidate` is neither.
  """
  if isinstance(candidate, type) and issubclass(candidate, cst.CSTTransformer):
    return VisitorTransformation(candidate)
  if isinstance(candidate, Transformation):
    return candidate
  raise ConfigurationError(f"Unsupported transformation type: {type(candidate).__name__}")


class TransformationRegistry(Mapping[str, Transformation]):
  """
  Read-only lookup of transformations by identifier.
  """

  def __init__(self, entries: Mapping[str, Transformation]) -> None:
    self._entries = MappingProxyType(dict(entries))

  def resolve(self, identifier: str) -> Transformation:
    """
    Looks up the transformation registered under `identifier`.

    Args:
        identifier: The rule target identifier.

    Returns:
        Transformation: The registered implementation.

    Raises:
        TransformError: If nothing is registered under `identifier`.
    """
    try:
      return self._entries[identifier]
    except KeyError:
      raise TransformError(f"No transformation registered for '{identifier}'") from None

  @property
  def identifiers(self) -> Tuple[str, ...]:
    """Registered identifiers in registration order."""
    return tuple(self._entries)

  def __getitem__(self, identifier: str) -> Transformation:
    return self._entries[identifier]

  def __iter__(self) -> Iterator[str]:
    return iter(self._entries)

  def __len__(self) -> int:
    return len(self._entries)


class RegistryBuilder:
  """
  Collects transformations before freezing them into a registry.
  """

  def __init__(self) -> None:
    self._entries: Dict[str, Transformation] = {}

  def register(self, identifier: str, transformation: Union[Transformation, Type[cst.CSTTransformer]]) -> "RegistryBuilder":
    """
    Adds a transformation under a unique identifier.

    Args:
        identifier: Stable key used by rules to reference the transformation.
        transformation: The implementation, or a `CSTTransformer` subclass.

    Returns:
        RegistryBuilder: `self`, for chaining.

    Raises:
        ConfigurationError: If the identifier is empty or already registered.
    """
    if not identifier:
      raise ConfigurationError("Transformation identifier must not be empty")
    if identifier in self._entries:
      raise ConfigurationError(f"Transformation '{identifier}' is already registered")
    self._entries[identifier] = as_transformation(transformation)
    return self

  def transformation(self, identifier: str) -> Callable[[T], T]:
    """
    Decorator form of `register`.

    Args:
        identifier: Stable key for the decorated transformer class.

    Returns:
        Callable: A decorator returning its argument unchanged.
    """

    def decorator(candidate: T) -> T:
      self.register(identifier, candidate)
      return candidate

    return decorator

  def build(self) -> TransformationRegistry:
    """
    Freezes the collected entries.

    Returns:
        TransformationRegistry: An immutable registry snapshot.
    """
    return TransformationRegistry(self._entries)
