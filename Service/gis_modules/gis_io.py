"""
Service/gis_modules/gis_io.py

입력 피처(GeoJSON/SHP/GPKG) 로드와 토폴로지/GeoJSON 결과 저장을 담당하는 모듈입니다.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import geopandas as gpd

from Common.log import Log
from Function.decorators import log_execution_time, safe_run
from Service.schemas import (
    FeatureCollection,
    FileLoadRequest,
    FileSaveRequest,
    GeoJSONSaveRequest,
    TopologyLoadRequest,
)
from Service.gis_modules.topology.codec import dumps, loads
from Service.gis_modules.topology.model import Topology


class GISIO:
    """
    피처 파일을 FeatureCollection 으로 읽고, 토폴로지 JSON 을 저장/로드합니다.
    """

    _JSON_SUFFIXES = (".geojson", ".json")

    def __init__(self, logger: Log):
        self._logger = logger

    @safe_run
    @log_execution_time
    def load(self, request: FileLoadRequest) -> FeatureCollection:
        """
        피처 파일을 로드합니다. GeoJSON 은 feature id 를 보존하기 위해 직접 파싱하고,
        SHP/GPKG 는 geopandas 로 읽어 GeoJSON 형태로 변환합니다.

        Args:
            request (FileLoadRequest): 파일 경로를 포함한 로드 요청 객체

        Returns:
            FeatureCollection: 검증된 입력 피처 집합
        """
        file_path = request.file_path.expanduser().resolve()

        if file_path.suffix.lower() in self._JSON_SUFFIXES:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
            collection = FeatureCollection.model_validate(raw)
        else:
            gdf = gpd.read_file(file_path)
            self._log_frame_info(gdf)
            collection = FeatureCollection.model_validate(json.loads(gdf.to_json(na="null", drop_id=True)))

        if not collection.features:
            raise ValueError("로드된 데이터가 비어있습니다.")

        self._logger.log(f"데이터 로드 상세 - 피처 수: {len(collection.features)}, 파일: {file_path.name}", level="INFO")
        return collection

    @safe_run
    @log_execution_time
    def save_topology(self, topology: Topology, request: FileSaveRequest) -> Path:
        """
        토폴로지를 JSON 파일로 저장합니다.

        Returns:
            Path: 저장된 파일의 경로
        """
        output_path = request.output_path.expanduser().resolve()

        if not topology.objects:
            self._logger.log("저장할 토폴로지 객체가 비어있습니다.", level="WARNING")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(dumps(topology), encoding="utf-8")

        self._logger.log(f"저장 완료: {output_path}", level="INFO")
        return output_path

    @safe_run
    @log_execution_time
    def load_topology(self, request: TopologyLoadRequest) -> Topology:
        file_path = request.file_path.expanduser().resolve()
        topology = loads(file_path.read_text(encoding="utf-8"))
        self._logger.log(
            f"토폴로지 로드 - 객체 수: {len(topology.objects)}, 아크 수: {len(topology.arcs)}", level="INFO"
        )
        return topology

    @safe_run
    @log_execution_time
    def save_geojson(self, collection: Dict[str, Any], request: GeoJSONSaveRequest) -> Path:
        output_path = request.output_path.expanduser().resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(collection, ensure_ascii=False), encoding="utf-8")

        self._logger.log(f"GeoJSON 저장 완료: {output_path} (피처 {len(collection.get('features', []))}개)", level="INFO")
        return output_path

    def _log_frame_info(self, gdf: gpd.GeoDataFrame) -> None:
        """CRS 정보를 기록합니다. 토폴로지 변환은 좌표계를 바꾸지 않습니다."""
        crs_name = getattr(gdf.crs, "name", None) or "Unknown"
        epsg = self._try_to_epsg(gdf)
        geom_types = sorted(set(gdf.geometry.geom_type.dropna().unique())) if not gdf.empty else []
        self._logger.log(f"[IO] 객체 수: {len(gdf)}, CRS: {crs_name}, EPSG: {epsg}, 타입: {geom_types}", level="INFO")

        if gdf.crs is None:
            self._logger.log("[IO] 입력 데이터에 CRS 가 없습니다.", level="WARNING")

    def _try_to_epsg(self, gdf: gpd.GeoDataFrame) -> Optional[int]:
        """좌표계 정보를 EPSG 코드로 변환 시도합니다."""
        if gdf.crs is None:
            return None
        try:
            return gdf.crs.to_epsg()
        except Exception:
            return None
