from typing import Never

__all__ = ["noInstance"]


def _noInstanceInit(self, *args, **kwargs) -> Never:
    raise TypeError(
        f"{self.__class__.__name__} is a namespace of constants and cannot be instantiated"
    )


def noInstance[T](cls: type[T]) -> type[T]:
    """
    Class decorator marking a class as a pure namespace of constants or static helpers, such as
    `Accis` or `Scales`. Trying to instantiate the decorated class raises `TypeError`.
    """
    cls.__init__ = _noInstanceInit
    return cls
