"""
Service/gis_modules/topology/__init__.py

피처 집합을 공유 아크 기반 토폴로지로 변환하는 단계 모듈들과 코덱/필터/내보내기 기능을 외부로 노출합니다.
"""
from .processor import TopologyProcessor, build_processor
from .bounds import BoundsCalculator
from .quantize import PreQuantizer, PostQuantizer, Quantizer, round_half_away
from .extract import Extractor
from .join import JunctionDetector
from .cut import ArcCutter
from .dedup import ArcDeduplicator
from .unpack import ArcUnpacker, ObjectUnpacker
from .simplify import ArcSimplifier, visvalingam_threshold
from .cleaners import EmptyGeometryCleaner
from .delta import DeltaEncoder, delta_encode
from .diagnostics import TopologyDiagnostics
from .filter import TopologyFilter, filter_topology
from .codec import decode_geometry, decode_topology, dumps, encode_geometry, encode_topology, loads
from .geojson import to_geojson
from .errors import TopologyDecodeError, UnsupportedGeometryError
from .model import ArcSlice, Geometry, Topology, TopologyObject, Transform
from .state import TopologyState

__all__ = [
    "TopologyProcessor",
    "build_processor",
    "BoundsCalculator",
    "PreQuantizer",
    "PostQuantizer",
    "Quantizer",
    "round_half_away",
    "Extractor",
    "JunctionDetector",
    "ArcCutter",
    "ArcDeduplicator",
    "ArcUnpacker",
    "ObjectUnpacker",
    "ArcSimplifier",
    "visvalingam_threshold",
    "EmptyGeometryCleaner",
    "DeltaEncoder",
    "delta_encode",
    "TopologyDiagnostics",
    "TopologyFilter",
    "filter_topology",
    "decode_geometry",
    "decode_topology",
    "dumps",
    "encode_geometry",
    "encode_topology",
    "loads",
    "to_geojson",
    "TopologyDecodeError",
    "UnsupportedGeometryError",
    "ArcSlice",
    "Geometry",
    "Topology",
    "TopologyObject",
    "Transform",
    "TopologyState",
]
