"""
Service/config.py

토폴로지 빌드 파이프라인의 동작을 제어하는 설정 모듈입니다.
"""
from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from Service.schemas import check_quantize_resolution


class TopologyConfig(BaseSettings):
    """
    토폴로지 파이프라인의 기본 옵션과 부가 기능 스위치를 정의하는 설정 클래스입니다.
    """

    pre_quantize: float = Field(
        default=0.0,
        ge=0.0,
        description="토폴로지 연산 전 좌표 격자 해상도 (0 이면 비활성)"
    )

    post_quantize: float = Field(
        default=0.0,
        ge=0.0,
        description="출력용 좌표 격자 해상도 (0 이면 델타 인코딩 비활성)"
    )

    simplify: float = Field(
        default=0.0,
        ge=0.0,
        description="Visvalingam-Whyatt 단순화 면적 임계값 (0 이면 비활성)"
    )

    id_property: str = Field(
        default="id",
        min_length=1,
        description="피처 id 가 없을 때 식별자로 사용할 속성 이름"
    )

    diagnostics_enabled: bool = Field(
        default=True,
        description="빌드 후 아크 그래프 진단 로그 출력 여부"
    )

    debug_export_intermediate: bool = Field(
        default=False,
        description="디버그 모드: 단계별 메타데이터를 Result 폴더에 저장 여부"
    )

    log_retention_days: int = Field(
        default=3,
        ge=0,
        description="로그 파일 보관 일수"
    )

    model_config = SettingsConfigDict(
        env_prefix="TOPO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @model_validator(mode="after")
    def validate_quantize(self) -> "TopologyConfig":
        check_quantize_resolution(self.pre_quantize, self.post_quantize)
        return self
