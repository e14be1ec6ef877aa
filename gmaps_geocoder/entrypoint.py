"""CLIエントリーポイント"""
import argparse
import json
import sys
from typing import Optional

from .features.geocoding.providers.google_maps_geocoder import GoogleMapsGeocoder
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import GeocoderError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        description="Google Maps Geocoding APIで住所と座標を相互変換する",
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--address",
        type=str,
        help="ジオコーディングする住所",
    )
    target.add_argument(
        "--latlng",
        type=float,
        nargs=2,
        metavar=("LAT", "LNG"),
        help="逆ジオコーディングする座標",
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="最初の結果だけでなく全ての結果を出力",
    )

    parser.add_argument("--language", type=str, help="結果の言語（例: ja）")
    parser.add_argument("--region", type=str, help="地域バイアス（例: jp）")
    parser.add_argument("--bounds", type=str, help="ビューポートバイアス（lat,lng|lat,lng）")
    parser.add_argument("--country", type=str, help="国フィルタ（例: jp）")

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    args = build_parser().parse_args(argv)

    try:
        # 設定を読み込み
        settings = Settings(_env_file=args.env_file)

        # ログレベルを上書き
        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        geocoder = GoogleMapsGeocoder.from_settings(settings)

        # 引数で指定された設定を上書き
        if args.language:
            geocoder = geocoder.with_language(args.language)
        if args.region:
            geocoder = geocoder.with_region(args.region)
        if args.bounds:
            geocoder = geocoder.with_bounds(args.bounds)
        if args.country:
            geocoder = geocoder.with_country(args.country)

        if args.address is not None:
            locations = geocoder.geocode_address_all(args.address)
        else:
            lat, lng = args.latlng
            locations = geocoder.reverse_geocode_all(lat, lng)

        if args.all:
            output = [location.to_dict() for location in locations]
        else:
            output = locations[0].to_dict()

        print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except GeocoderError as e:
        logger.error(f"Geocoding failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
