"""
Function/decorators.py

파이프라인 단계의 실행 시간 측정 및 예외 기록을 위한 데코레이터 모듈입니다.
"""
from __future__ import annotations

import functools
import logging
import time
import traceback
from typing import Any, Callable, ParamSpec, TypeVar, Optional

P = ParamSpec("P")
R = TypeVar("R")


def _resolve_custom_logger(instance: Any) -> Optional[Any]:
    """
    인스턴스가 보유한 커스텀 로거(`_logger` 또는 `logger`)를 찾아 반환합니다.

    Args:
        instance (Any): 클래스 인스턴스(self)

    Returns:
        Optional[Any]: log 메서드를 가진 로거 또는 None
    """
    if instance is None:
        return None

    for attr in ("_logger", "logger"):
        candidate = getattr(instance, attr, None)
        if candidate is not None and hasattr(candidate, "log"):
            return candidate

    return None


def _emit(instance: Any, msg: str, level: str) -> None:
    """커스텀 로거가 있으면 그쪽으로, 없으면 표준 logging 으로 메시지를 전달합니다."""
    custom_logger = _resolve_custom_logger(instance)
    if custom_logger:
        custom_logger.log(msg, level=level)
        return
    logging.getLogger("topology").log(getattr(logging, level, logging.DEBUG), msg)


def log_execution_time(func: Callable[P, R]) -> Callable[P, R]:
    """
    함수의 시작과 종료 시점을 기록하고 실행 시간을 측정하는 데코레이터입니다.

    Returns:
        Callable: 데코레이트된 함수
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        instance = args[0] if args else None
        func_name = func.__qualname__

        _emit(instance, f"▶ [시작] {func_name}", "DEBUG")
        start_time = time.perf_counter()

        result = func(*args, **kwargs)

        elapsed = time.perf_counter() - start_time
        _emit(instance, f"◀ [완료] {func_name} (소요 시간: {elapsed:.4f}초)", "INFO")

        return result

    return wrapper


def safe_run(func: Callable[P, R]) -> Callable[P, R]:
    """
    실행 중 발생한 예외의 Traceback 을 로그에 남기고 예외를 그대로 재전파합니다.

    Returns:
        Callable: 데코레이트된 함수

    Raises:
        Exception: 원본 함수에서 발생한 예외
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except Exception:
            instance = args[0] if args else None
            tb_str = traceback.format_exc()
            _emit(instance, f"'{func.__qualname__}' 실행 중 치명적 오류 발생\n[Traceback]\n{tb_str}", "ERROR")
            raise

    return wrapper
