"""
Interceptor Registry

요청/응답/에러 인터셉터를 등록 순서대로 보관합니다.
- use(fn) → 핸들 반환
- eject(handle) → 제거
"""

from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass
class RequestDescriptor:
    """요청 1건의 기술자 (호출마다 새로 생성)"""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    files: Optional[dict] = None
    data: Optional[dict] = None
    params: Optional[dict] = None
    timeout: float = 10.0
    retries: int = 3


class InterceptorChain(Generic[T]):
    """등록 순서를 유지하는 인터셉터 목록"""

    def __init__(self):
        self._handles = count()
        self._items: dict[int, T] = {}

    def use(self, interceptor: T) -> int:
        handle = next(self._handles)
        self._items[handle] = interceptor
        return handle

    def eject(self, handle: int):
        self._items.pop(handle, None)

    def clear(self):
        self._items.clear()

    def __iter__(self) -> Iterator[T]:
        # 실행 중 use/eject 되어도 안전하도록 스냅샷 순회
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


RequestInterceptor = Callable[[RequestDescriptor], RequestDescriptor]
ResponseInterceptor = Callable[..., Any]
ErrorInterceptor = Callable[[Exception], Optional[Exception]]


class Interceptors:
    """ApiClient.interceptors (request / response / error)"""

    def __init__(self):
        self.request: InterceptorChain[RequestInterceptor] = InterceptorChain()
        self.response: InterceptorChain[ResponseInterceptor] = InterceptorChain()
        self.error: InterceptorChain[ErrorInterceptor] = InterceptorChain()
