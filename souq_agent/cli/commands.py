"""
CLI 명령어 처리 모듈

서브커맨드:
- import: 공급사 검색 → products_raw.json
- optimize: 아랍어 문구 + 판매가 → products_optimized.json
- price: 판매가 단건 계산
- run: import + optimize
"""

import argparse
import sys
from dataclasses import dataclass
from typing import Any, List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.rule import Rule
from rich.text import Text

from .. import __version__
from ..core.config import AppSettings, load_settings
from ..core.exceptions import SouqAgentError
from ..core.logging import setup_logger
from ..domain.models import ProductCost
from ..domain.pricing import PriceCalculator
from ..importer.import_pipeline import ProductImporter
from ..publisher.optimize_pipeline import OptimizePipeline
from ..utils.helpers import format_currency


@dataclass
class CLIConfig:
    """CLI 설정"""
    verbose: bool = False
    no_color: bool = False
    config_path: Optional[str] = None
    log_dir: Optional[str] = None


class CLI:
    """Souq Agent CLI 출력 (rich 콘솔)"""

    VERSION = __version__

    def __init__(self, config: CLIConfig = None):
        self.config = config or CLIConfig()
        options = dict(no_color=self.config.no_color, highlight=False, soft_wrap=True)
        self.console = Console(**options)
        self.err_console = Console(stderr=True, **options)

    def banner(self):
        self.console.print(Text(f"\n  Souq Agent v{self.VERSION} - 사우디 이커머스 상품 소싱 도구\n", style="bold"))

    def print_header(self, title: str):
        self.console.print()
        self.console.print(Rule(Text(title, style="cyan"), style="bold"))

    def print_step(self, step: int, total: int, message: str):
        self.console.print(Text.assemble("\n", (f"[{step}/{total}]", "cyan"), f" {message}"))

    def print_result(self, key: str, value: Any, indent: int = 2):
        self.console.print(Text.assemble(" " * indent, f"{key}: ", (str(value), "bold")))

    def print_success(self, message: str):
        self.console.print(Text.assemble("\n✅ ", (message, "green")))

    def print_error(self, message: str):
        self.err_console.print(Text.assemble("\n❌ ", (message, "red")))

    def print_warning(self, message: str):
        self.console.print(Text.assemble("\n⚠️ ", (message, "yellow")))

    def progress(self) -> Progress:
        """상품 처리 진행 표시줄"""
        return Progress(
            TextColumn("  {task.description}"),
            BarColumn(bar_width=40),
            TextColumn("{task.completed}/{task.total}"),
            console=self.console,
        )


def create_parser() -> argparse.ArgumentParser:
    """CLI 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="souq-agent",
        description="사우디 이커머스 상품 소싱 도구 (공급사 수집 → 아랍어 현지화 → 판매가)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 공급사 상품 수집
  %(prog)s import --output products_raw.json

  # 문구 현지화 + 판매가 계산
  %(prog)s optimize --input products_raw.json --output products_optimized.json

  # 판매가 단건 계산
  %(prog)s price --supplier-price 100 --shipping 20

  # 전체 실행 (API 키 없이)
  %(prog)s run --mock
"""
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="설정 파일 경로 (기본: ./config.yml)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="상세 출력 모드"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="컬러 출력 비활성화"
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="파일 로그 디렉토리 (지정 시 로테이션 로그 기록)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {CLI.VERSION}"
    )

    subparsers = parser.add_subparsers(dest="command", help="사용 가능한 명령어")

    # import 커맨드
    import_parser = subparsers.add_parser("import", help="공급사 상품 수집")
    import_parser.add_argument("--output", type=str, help="출력 파일 (기본: products_raw.json)")
    import_parser.add_argument("--mock", action="store_true", help="Mock 공급사 사용")

    # optimize 커맨드
    optimize_parser = subparsers.add_parser("optimize", help="아랍어 문구 + 판매가 생성")
    optimize_parser.add_argument("--input", type=str, help="입력 파일 (기본: products_raw.json)")
    optimize_parser.add_argument("--output", type=str, help="출력 파일 (기본: products_optimized.json)")
    optimize_parser.add_argument("--mock", action="store_true", help="Mock Gemini 사용")

    # price 커맨드
    price_parser = subparsers.add_parser("price", help="판매가 계산")
    price_parser.add_argument("--supplier-price", type=float, required=True, help="공급가 (SAR)")
    price_parser.add_argument("--shipping", type=float, default=0.0, help="배송비 (SAR)")

    # run 커맨드
    run_parser = subparsers.add_parser("run", help="수집 + 현지화 전체 실행")
    run_parser.add_argument("--mock", action="store_true", help="Mock 공급사/Gemini 사용")

    return parser


def cmd_import(args, cli: CLI, settings: AppSettings) -> int:
    """수집 명령어 실행"""
    cli.print_header("📦 공급사 상품 수집")

    importer = ProductImporter(settings, use_mock=args.mock)
    result = importer.run(args.output)

    for supplier, count in result.fetched.items():
        cli.print_result(supplier, f"{count}개 수신", 4)
    cli.print_result("정규화", f"{result.normalized}개", 4)
    cli.print_result("필터 통과", f"{result.kept}개", 4)

    if result.errors:
        for err in result.errors:
            cli.print_warning(err)

    cli.print_success(f"{result.output_path} 저장 완료 ({result.kept}개)")
    return 0


def cmd_optimize(args, cli: CLI, settings: AppSettings) -> int:
    """현지화 명령어 실행"""
    cli.print_header("✍️ 아랍어 문구 + 판매가 생성")

    pipeline = OptimizePipeline(settings, use_mock=args.mock)

    with cli.progress() as progress:
        task = progress.add_task("현지화", total=None)

        def on_progress(done: int, total: int):
            progress.update(task, completed=done, total=total)

        result = pipeline.run(args.input, args.output, on_progress=on_progress)

    cli.print_result("전체", f"{result.total}개", 4)
    cli.print_result("성공", f"{result.succeeded}개", 4)
    cli.print_result("실패", f"{result.failed}개", 4)

    if result.failed:
        cli.print_warning(f"건너뛴 상품: {', '.join(result.failed_ids[:10])}")

    cli.print_success(f"{result.output_path} 생성 완료 ({result.succeeded}개)")
    return 0


def cmd_price(args, cli: CLI, settings: AppSettings) -> int:
    """판매가 계산 명령어 실행"""
    cli.print_header("💰 판매가 계산기")

    calc = PriceCalculator(settings.pricing_config(), strict=True)
    cost = ProductCost(supplier_price=args.supplier_price, supplier_shipping=args.shipping)
    breakdown = calc.breakdown(cost)

    cli.print_result("원가 (공급가+배송비)", format_currency(breakdown["base_cost"]), 4)
    cli.print_result("마진", f"{breakdown['margin']:.0%}", 4)
    cli.print_result("마진 적용가", format_currency(breakdown["with_margin"]), 4)
    cli.print_result("부가세", f"{breakdown['vat_rate']:.0%}", 4)
    cli.print_result("부가세 포함", format_currency(breakdown["with_vat"]), 4)

    cli.console.print("\n  📊 최종 판매가:")
    cli.print_result("판매가", format_currency(breakdown["final_price"]), 4)
    return 0


def cmd_run(args, cli: CLI, settings: AppSettings) -> int:
    """전체 실행"""
    cli.banner()

    if not args.mock:
        for message in settings.validate():
            cli.print_warning(message)

    cli.print_step(1, 2, "공급사 상품 수집")
    import_args = argparse.Namespace(output=settings.input_path, mock=args.mock)
    cmd_import(import_args, cli, settings)

    cli.print_step(2, 2, "문구 현지화 + 판매가 계산")
    optimize_args = argparse.Namespace(
        input=settings.input_path, output=settings.output_path, mock=args.mock
    )
    return cmd_optimize(optimize_args, cli, settings)


COMMANDS = {
    "import": cmd_import,
    "optimize": cmd_optimize,
    "price": cmd_price,
    "run": cmd_run,
}


def run_cli(argv: Optional[List[str]] = None) -> int:
    """CLI 실행

    Returns:
        종료 코드 (0 성공, 1 실패)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = CLIConfig(
        verbose=args.verbose,
        no_color=args.no_color,
        config_path=args.config,
        log_dir=args.log_dir
    )
    cli = CLI(config)

    if args.command not in COMMANDS:
        # 명령어 없으면 도움말
        cli.banner()
        parser.print_help()
        return 0

    try:
        settings = load_settings(config.config_path)
        setup_logger(
            level="DEBUG" if config.verbose else settings.log_level,
            log_dir=config.log_dir
        )
        return COMMANDS[args.command](args, cli, settings)
    except SouqAgentError as e:
        cli.print_error(str(e))
        return 1


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
