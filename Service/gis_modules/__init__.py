"""
Service/gis_modules/__init__.py

토폴로지 빌드 파이프라인 구성에 필요한 주요 모듈들을 외부로 노출합니다.
"""
from .gis_io import GISIO
from .validator import ResultValidator
from .topology import TopologyFilter, TopologyProcessor

__all__ = [
    "GISIO",
    "ResultValidator",
    "TopologyFilter",
    "TopologyProcessor",
]
