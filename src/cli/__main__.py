"""CLI 도구 — 교감 대조 엔진.

사용법:
    python -m cli collate <저본 파일> <대교본 파일> [--clean] [--convert local|llm] [--format text|json|csv] [--output FILE]
    python -m cli convert <파일> [--method local|llm] [--output FILE]
    python -m cli extract <파일> [--clean] [--output FILE]

pip install -e . 후 실행하거나, src/ 디렉토리에서 실행한다.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가하여 pip install 없이도 실행 가능하게 한다.
# (pip install -e . 후에는 이 조작이 불필요하지만, 해가 되지 않는다.)
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from converter import CONVERT_METHODS, ConversionFailedError, get_converter  # noqa: E402
from core.collation import collate  # noqa: E402
from core.report import REPORT_FORMATS, export_report  # noqa: E402
from llm.providers.base import MissingCredentialError  # noqa: E402
from text_import.file_parser import UnsupportedFormatError, parse_file  # noqa: E402
from text_import.text_cleaner import clean_text  # noqa: E402


def _fail(e: Exception):
    print(f"오류: {e}", file=sys.stderr)
    sys.exit(1)


def _write_output(content: str, output: str | None):
    """--output이 있으면 파일로, 없으면 표준 출력으로."""
    if output:
        Path(output).write_text(content, encoding="utf-8")
        print(f"✓ 저장했습니다: {output}")
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")


def _load(path: str, clean: bool) -> str:
    text = parse_file(path)
    return clean_text(text) if clean else text


def _convert(text: str, method: str) -> str:
    converter = get_converter(method)
    return asyncio.run(converter.convert(text))


def cmd_collate(args):
    """두 파일을 대조하여 보고서를 출력한다."""
    try:
        base = _load(args.base, args.clean)
        compare = _load(args.compare, args.clean)
        if args.convert:
            base = _convert(base, args.convert)
            compare = _convert(compare, args.convert)
    except (
        FileNotFoundError,
        UnsupportedFormatError,
        ValueError,
        MissingCredentialError,
        ConversionFailedError,
    ) as e:
        _fail(e)

    result = collate(base, compare)
    _write_output(export_report(result, args.format), args.output)


def cmd_convert(args):
    """파일 텍스트를 繁→簡 변환한다."""
    try:
        text = _convert(_load(args.file, clean=False), args.method)
    except (
        FileNotFoundError,
        UnsupportedFormatError,
        ValueError,
        MissingCredentialError,
        ConversionFailedError,
    ) as e:
        _fail(e)
    _write_output(text, args.output)


def cmd_extract(args):
    """문서 파일에서 텍스트를 추출한다."""
    try:
        text = _load(args.file, args.clean)
    except (FileNotFoundError, UnsupportedFormatError, ValueError) as e:
        _fail(e)
    _write_output(text, args.output)


def main():
    parser = argparse.ArgumentParser(
        prog="collate-cli",
        description="교감 대조 엔진 — CLI 도구",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="디버그 로그 출력")
    subparsers = parser.add_subparsers(dest="command")

    # collate
    p_collate = subparsers.add_parser(
        "collate",
        help="저본과 대교본을 문장 단위로 대조한다",
    )
    p_collate.add_argument("base", help="저본(底本) 파일")
    p_collate.add_argument("compare", help="대교본(對校本) 파일")
    p_collate.add_argument("--clean", action="store_true", help="줄바꿈·공백 정리 후 대조")
    p_collate.add_argument(
        "--convert", choices=CONVERT_METHODS, default=None,
        help="대조 전 繁→簡 변환 방식",
    )
    p_collate.add_argument(
        "--format", choices=REPORT_FORMATS, default="text",
        help="보고서 형식 (기본: text)",
    )
    p_collate.add_argument("--output", "-o", help="보고서 저장 경로")
    p_collate.set_defaults(func=cmd_collate)

    # convert
    p_convert = subparsers.add_parser(
        "convert",
        help="파일 텍스트를 繁→簡 변환한다",
    )
    p_convert.add_argument("file", help="변환할 파일")
    p_convert.add_argument(
        "--method", choices=CONVERT_METHODS, default="local",
        help="변환 방식 (기본: local)",
    )
    p_convert.add_argument("--output", "-o", help="저장 경로")
    p_convert.set_defaults(func=cmd_convert)

    # extract
    p_extract = subparsers.add_parser(
        "extract",
        help="문서 파일(txt/docx/pdf/hwp)에서 텍스트를 추출한다",
    )
    p_extract.add_argument("file", help="문서 파일")
    p_extract.add_argument("--clean", action="store_true", help="줄바꿈·공백 정리")
    p_extract.add_argument("--output", "-o", help="저장 경로")
    p_extract.set_defaults(func=cmd_extract)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
