"""
Service/gis_modules/topology/errors.py

토폴로지 빌드 및 디코딩 과정에서 발생하는 예외 정의 모듈입니다.
"""


class TopologyDecodeError(ValueError):
    """토폴로지 JSON 의 필드가 형식에 맞지 않을 때 발생합니다."""


class UnsupportedGeometryError(ValueError):
    """파이프라인이 처리할 수 없는 geometry 타입을 만났을 때 발생합니다."""
