"""
Function/utils.py

프로그램 실행 환경에 따른 결과 파일 경로 연산을 처리하는 유틸리티 모듈입니다.
"""
from pathlib import Path
from typing import Optional
import sys


def get_runtime_base_path() -> Path:
    """
    실행 파일 또는 메인 스크립트가 위치한 물리적 경로를 반환합니다.

    Returns:
        Path: 프로그램 실행 파일이 위치한 디렉토리 경로
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


def resolve_output_path(input_path: Path, suffix: str, output_path: Optional[str] = None) -> Path:
    """
    출력 경로가 지정되지 않으면 실행 경로의 Result 폴더 아래에 `<입력명><suffix>` 경로를 만듭니다.

    Args:
        input_path (Path): 입력 파일 경로
        suffix (str): 파일명 뒤에 붙일 접미사(확장자 포함)
        output_path (Optional[str]): 사용자가 지정한 출력 경로

    Returns:
        Path: 결과 파일 경로
    """
    if output_path:
        return Path(output_path)

    output_dir = get_runtime_base_path() / "Result"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / f"{Path(input_path).stem}{suffix}"
