"""
main.py

애플리케이션의 진입점이며 객체 생성 및 의존성 주입(Composition Root)을 담당합니다.
"""
from __future__ import annotations

import argparse
import sys
import traceback
from typing import List, Optional

from Common.log import Log
from Function.log_cleanup import clean_old_logs
from Service.container import build_app
from Service.schemas import TopologyOptions


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build, filter and export shared-arc topologies.")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a topology from a GeoJSON/SHP/GPKG file")
    build.add_argument("input", help="Input feature file path")
    build.add_argument("--output", help="Output .topojson path (default: Result/<name>.topojson)")
    build.add_argument("--pre-quantize", type=float, default=None, help="Grid size before topology work (0 disables)")
    build.add_argument("--post-quantize", type=float, default=None, help="Grid size for emission (0 disables)")
    build.add_argument("--simplify", type=float, default=None, help="Visvalingam-Whyatt area threshold (0 disables)")
    build.add_argument("--id-property", default=None, help="Property used as id when a feature has none")

    flt = sub.add_parser("filter", help="Keep only the given object ids of a topology")
    flt.add_argument("input", help="Input .topojson path")
    flt.add_argument("--ids", required=True, help="Comma separated object ids")
    flt.add_argument("--output", help="Output .topojson path")

    export = sub.add_parser("geojson", help="Convert a topology back to GeoJSON")
    export.add_argument("input", help="Input .topojson path")
    export.add_argument("--output", help="Output .geojson path")

    return parser.parse_args(argv)


def _build_options(args: argparse.Namespace, defaults: TopologyOptions) -> TopologyOptions:
    """명령행에서 지정한 값만 설정 기본값 위에 덮어씁니다."""
    overrides = {
        "pre_quantize": args.pre_quantize,
        "post_quantize": args.post_quantize,
        "simplify": args.simplify,
        "id_property": args.id_property,
    }
    values = defaults.model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return TopologyOptions(**values)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = Log()

    try:
        logger.log("=== 애플리케이션 초기화 시작 ===", level="INFO")

        built = build_app(logger)
        clean_old_logs(logger.log_dir, logger, built.config.log_retention_days)

        service = built.topology_service

        if args.command == "build":
            options = _build_options(args, TopologyOptions.from_config(built.config))
            result_path = service.run_pipeline(args.input, options, args.output)
        elif args.command == "filter":
            ids = [part.strip() for part in args.ids.split(",") if part.strip()]
            result_path = service.filter_file(args.input, ids, args.output)
        else:
            result_path = service.export_geojson(args.input, args.output)

        logger.log(f"=== 작업 완료: {result_path} ===", level="INFO", create_log=True)
        return 0

    except Exception:
        error_msg = traceback.format_exc()
        logger.log(f"실행 중 치명적 오류 발생:\n{error_msg}", level="ERROR", create_log=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
