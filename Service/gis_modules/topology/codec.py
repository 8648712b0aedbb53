"""
Service/gis_modules/topology/codec.py

토폴로지 결과를 JSON 형태(dict)로 인코딩하고, 같은 형태를 다시 읽어 들이는 코덱 모듈입니다.

디코딩 중 형식 오류는 문제가 된 필드를 메시지에 담아 TopologyDecodeError 로 알립니다.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .errors import TopologyDecodeError
from .model import (
    Geometry,
    Topology,
    Transform,
    GEOMETRY_COLLECTION,
    LINE_STRING,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    POINT,
    POLYGON,
)

# 타입별 arcs 중첩 깊이
_ARC_DEPTH = {
    LINE_STRING: 1,
    MULTI_LINE_STRING: 2,
    POLYGON: 2,
    MULTI_POLYGON: 3,
}


def encode_topology(topology: Topology) -> Dict[str, Any]:
    data: Dict[str, Any] = {"type": topology.type}
    if topology.bbox is not None:
        data["bbox"] = list(topology.bbox)
    if topology.transform is not None:
        data["transform"] = {
            "scale": list(topology.transform.scale),
            "translate": list(topology.transform.translate),
        }
    data["objects"] = {key: encode_geometry(g) for key, g in (topology.objects or {}).items()}
    data["arcs"] = [[list(p) for p in arc] for arc in (topology.arcs or [])]
    return data


def encode_geometry(geometry: Geometry) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if geometry.id:
        data["id"] = geometry.id
    data["type"] = geometry.type
    if geometry.properties is not None:
        data["properties"] = geometry.properties
    if geometry.bbox is not None:
        data["bbox"] = list(geometry.bbox)

    if geometry.type in (POINT, MULTI_POINT):
        data["coordinates"] = geometry.coordinates
    elif geometry.type == GEOMETRY_COLLECTION:
        data["geometries"] = [encode_geometry(child) for child in geometry.geometries or []]
    else:
        data["arcs"] = geometry.arcs if geometry.arcs is not None else []
    return data


def dumps(topology: Topology, **kwargs: Any) -> str:
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(encode_topology(topology), **kwargs)


def loads(text: str) -> Topology:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TopologyDecodeError(f"JSON 파싱 실패: {e}") from e
    return decode_topology(data)


def decode_topology(data: Any) -> Topology:
    if not isinstance(data, dict):
        raise TopologyDecodeError("토폴로지는 JSON 객체여야 합니다.")

    ttype = data.get("type")
    if ttype is None:
        raise TopologyDecodeError("type 속성이 정의되지 않았습니다.")
    if ttype != "Topology":
        raise TopologyDecodeError(f"type 이 Topology 가 아닙니다: {ttype!r}")

    objects_raw = data.get("objects") or {}
    if not isinstance(objects_raw, dict):
        raise TopologyDecodeError("objects 는 JSON 객체여야 합니다.")

    arcs_raw = data.get("arcs") or []
    if not isinstance(arcs_raw, list):
        raise TopologyDecodeError("arcs 는 배열이어야 합니다.")

    return Topology(
        type=ttype,
        bbox=_decode_numbers(data.get("bbox"), "bbox"),
        transform=_decode_transform(data.get("transform")),
        objects={key: decode_geometry(value) for key, value in objects_raw.items()},
        arcs=[_decode_positions(arc, f"arcs[{i}]") for i, arc in enumerate(arcs_raw)],
    )


def decode_geometry(data: Any) -> Geometry:
    if not isinstance(data, dict):
        raise TopologyDecodeError("geometry 는 JSON 객체여야 합니다.")

    if "type" not in data:
        raise TopologyDecodeError("type 속성이 정의되지 않았습니다.")
    gtype = data["type"]
    if not isinstance(gtype, str):
        raise TopologyDecodeError(f"type 속성이 문자열이 아닙니다: {gtype!r}")

    properties = data.get("properties")
    if properties is not None and not isinstance(properties, dict):
        raise TopologyDecodeError(f"{gtype}.properties 는 JSON 객체여야 합니다.")

    geometry = Geometry(
        type=gtype,
        id=_decode_id(data.get("id")),
        properties=properties,
        bbox=_decode_numbers(data.get("bbox"), f"{gtype}.bbox"),
    )

    if gtype == POINT:
        geometry.coordinates = _decode_position(data.get("coordinates"), f"{gtype}.coordinates")
    elif gtype == MULTI_POINT:
        geometry.coordinates = _decode_positions(data.get("coordinates"), f"{gtype}.coordinates")
    elif gtype in _ARC_DEPTH:
        geometry.arcs = _decode_arcs(data.get("arcs"), _ARC_DEPTH[gtype], f"{gtype}.arcs")
    elif gtype == GEOMETRY_COLLECTION:
        children = data.get("geometries")
        if not isinstance(children, list):
            raise TopologyDecodeError(f"{gtype}.geometries 가 올바른 geometry 배열이 아닙니다.")
        geometry.geometries = [decode_geometry(child) for child in children]
    else:
        raise TopologyDecodeError(f"지원하지 않는 geometry 타입입니다: {gtype}")

    return geometry


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _decode_id(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    raise TopologyDecodeError(f"id 가 문자열 또는 숫자가 아닙니다: {value!r}")


def _decode_numbers(value: Any, field: str) -> Optional[List[float]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(_is_number(v) for v in value):
        raise TopologyDecodeError(f"{field} 가 숫자 배열이 아닙니다.")
    return list(value)


def _decode_transform(value: Any) -> Optional[Transform]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise TopologyDecodeError("transform 은 JSON 객체여야 합니다.")
    return Transform(
        scale=_decode_position(value.get("scale"), "transform.scale"),
        translate=_decode_position(value.get("translate"), "transform.translate"),
    )


def _decode_position(value: Any, field: str) -> List[float]:
    if not isinstance(value, list) or len(value) < 2 or not all(_is_number(v) for v in value):
        raise TopologyDecodeError(f"{field} 가 올바른 좌표가 아닙니다: {value!r}")
    return list(value)


def _decode_positions(value: Any, field: str) -> List[List[float]]:
    if not isinstance(value, list):
        raise TopologyDecodeError(f"{field} 가 올바른 좌표 배열이 아닙니다.")
    return [_decode_position(p, f"{field}[{i}]") for i, p in enumerate(value)]


def _decode_arcs(value: Any, depth: int, field: str) -> List[Any]:
    if not isinstance(value, list):
        raise TopologyDecodeError(f"{field} 가 올바른 아크 배열이 아닙니다.")
    if depth > 1:
        return [_decode_arcs(item, depth - 1, f"{field}[{i}]") for i, item in enumerate(value)]
    return [_decode_arc_index(item, f"{field}[{i}]") for i, item in enumerate(value)]


def _decode_arc_index(value: Any, field: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TopologyDecodeError(f"{field} 가 올바른 아크 인덱스가 아닙니다: {value!r}")
