'''
**apibase.result**
-----------------

`ResultView` wraps an already decoded response body (a nested mapping) so
its fields can be read by key or by attribute name, with nested mappings
wrapped on the way out.
'''
from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


def normalize_key(key: Any) -> str:
    return key if isinstance(key, str) else str(key)


class ResultView(MutableMapping[str, Any]):
    '''
    Ordered key/value view over a decoded API result.

    - `view["a"]`, `view.get("a")` and `view.a` all read the same value
    - a nested mapping comes back as a new `ResultView` on every read,
      the stored data is never rewrapped in place
    - keys are stored as `str`
    '''
    __slots__ = ('_data',)

    def __init__(self, data: Mapping[Any, Any] | None = None) -> None:
        object.__setattr__(self, '_data', {})
        if data:
            for key, value in data.items():
                self[key] = value

    @staticmethod
    def _wrap(value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, ResultView):
            return ResultView(value)
        return value

    def __getitem__(self, key: Any) -> Any:
        return self._wrap(self._data[normalize_key(key)])

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[normalize_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        del self._data[normalize_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('__') or name == '_data':
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f'{type(self).__name__!r} has no field {name!r}'
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f'ResultView({self._data!r})'

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._data))

    def set(self, key: Any, value: Any) -> None:
        self[key] = value

    def view(self, key: Any) -> ResultView:
        '''
        Read a nested mapping as a `ResultView`.

        Raises
        ------
        KeyError
            key is missing
        TypeError
            the value is not a mapping
        '''
        value = self[key]
        if not isinstance(value, ResultView):
            raise TypeError(
                f'{key!r} holds {type(value).__name__}, not a mapping'
            )
        return value

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value.to_dict() if isinstance(value, ResultView) else value
            for key, value in self.items()
        }
