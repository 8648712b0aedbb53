"""
Service/schemas.py

입력 피처와 파일 요청의 구조를 정의하고 유효성을 검증하는 스키마 모듈입니다.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

GEOMETRY_TYPES = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
)


class FileLoadRequest(BaseModel):
    """
    입력 피처 파일 로드 요청을 위한 데이터 모델입니다.
    """
    file_path: Path = Field(..., description="읽어올 GeoJSON/SHP/GPKG 파일의 경로")

    @field_validator("file_path")
    @classmethod
    def validate_extension(cls, v: Path) -> Path:
        if v.suffix.lower() not in (".geojson", ".json", ".shp", ".gpkg"):
            raise ValueError(f"지원하지 않는 파일 형식입니다. (.geojson/.json/.shp/.gpkg 필요): {v.suffix}")
        return v

    @field_validator("file_path")
    @classmethod
    def validate_existence(cls, v: Path) -> Path:
        resolved_path = v.resolve()
        if not resolved_path.exists() or not resolved_path.is_file():
            raise ValueError(f"파일을 찾을 수 없습니다: {resolved_path}")
        return resolved_path


class TopologyLoadRequest(BaseModel):
    """
    저장된 토폴로지 JSON 로드 요청입니다.
    """
    file_path: Path = Field(..., description="읽어올 토폴로지 파일의 경로")

    @field_validator("file_path")
    @classmethod
    def validate_existence(cls, v: Path) -> Path:
        resolved_path = v.resolve()
        if not resolved_path.exists() or not resolved_path.is_file():
            raise ValueError(f"파일을 찾을 수 없습니다: {resolved_path}")
        return resolved_path


class FileSaveRequest(BaseModel):
    """
    토폴로지 저장 요청을 위한 데이터 모델입니다.
    """
    output_path: Path = Field(..., description="결과를 저장할 파일 경로")

    @field_validator("output_path")
    @classmethod
    def validate_extension(cls, v: Path) -> Path:
        if v.suffix.lower() not in (".topojson", ".json"):
            raise ValueError(f"저장 파일 형식은 .topojson 또는 .json 이어야 합니다: {v.suffix}")
        return v.resolve()


class GeoJSONSaveRequest(BaseModel):
    """
    GeoJSON 내보내기 요청입니다.
    """
    output_path: Path = Field(..., description="GeoJSON 을 저장할 파일 경로")

    @field_validator("output_path")
    @classmethod
    def validate_extension(cls, v: Path) -> Path:
        if v.suffix.lower() != ".geojson":
            raise ValueError(f"저장 파일 형식은 .geojson 이어야 합니다: {v.suffix}")
        return v.resolve()


class GeoJSONGeometry(BaseModel):
    """
    GeoJSON geometry 객체입니다. GeometryCollection 은 geometries 로 재귀합니다.
    """
    type: str
    coordinates: Optional[Any] = None
    geometries: Optional[List["GeoJSONGeometry"]] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in GEOMETRY_TYPES:
            raise ValueError(f"지원하지 않는 geometry 타입입니다: {v}")
        return v

    @model_validator(mode="after")
    def validate_members(self) -> "GeoJSONGeometry":
        if self.type == "GeometryCollection":
            if self.geometries is None:
                self.geometries = []
        elif self.coordinates is None:
            raise ValueError(f"{self.type} 에 coordinates 가 없습니다.")
        elif not isinstance(self.coordinates, list):
            raise ValueError(f"{self.type} 의 coordinates 는 배열이어야 합니다.")
        return self


class Feature(BaseModel):
    """
    GeoJSON Feature 입니다. id 는 문자열 또는 숫자를 허용합니다.
    """
    type: str = "Feature"
    id: Optional[Union[str, int, float]] = None
    properties: Optional[Dict[str, Any]] = None
    bbox: Optional[List[float]] = None
    geometry: Optional[GeoJSONGeometry] = None


class FeatureCollection(BaseModel):
    """
    토폴로지 빌드 입력이 되는 GeoJSON FeatureCollection 입니다.
    """
    type: str = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v != "FeatureCollection":
            raise ValueError(f"FeatureCollection 이 아닙니다: {v}")
        return v


def check_quantize_resolution(pre_quantize: float, post_quantize: float) -> None:
    """양자화 해상도는 0(비활성) 이거나 1 보다 커야 합니다. 1 이하이면 격자 배율이 0 또는 음수가 됩니다."""
    for name, value in (("pre_quantize", pre_quantize), ("post_quantize", post_quantize)):
        if value != 0 and value <= 1:
            raise ValueError(f"{name} 는 0 이거나 1 보다 커야 합니다: {value}")


class TopologyOptions(BaseModel):
    """
    단일 토폴로지 빌드에 적용되는 옵션입니다.
    """
    pre_quantize: float = Field(default=0.0, ge=0.0, description="사전 양자화 해상도")
    post_quantize: float = Field(default=0.0, ge=0.0, description="출력 양자화 해상도")
    simplify: float = Field(default=0.0, ge=0.0, description="단순화 면적 임계값")
    id_property: str = Field(default="id", min_length=1, description="id 대체 속성 이름")

    @model_validator(mode="after")
    def validate_quantize(self) -> "TopologyOptions":
        check_quantize_resolution(self.pre_quantize, self.post_quantize)
        return self

    @classmethod
    def from_config(cls, config: Any) -> "TopologyOptions":
        return cls(
            pre_quantize=float(getattr(config, "pre_quantize", 0.0)),
            post_quantize=float(getattr(config, "post_quantize", 0.0)),
            simplify=float(getattr(config, "simplify", 0.0)),
            id_property=str(getattr(config, "id_property", "id")),
        )
