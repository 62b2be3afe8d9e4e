"""웹 앱 진입점.

사용법:
    python -m app serve [--port 8000] [--host 127.0.0.1] [--env-file .env]
"""

import argparse
import logging
import sys
from pathlib import Path

# src/ 디렉토리를 Python 경로에 추가
_src_dir = str(Path(__file__).resolve().parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


def main():
    parser = argparse.ArgumentParser(
        prog="collate-server",
        description="교감 대조 엔진 웹 서버",
    )
    subparsers = parser.add_subparsers(dest="command")

    p_serve = subparsers.add_parser("serve", help="웹 서버를 실행한다")
    p_serve.add_argument("--port", type=int, default=8000, help="포트 (기본: 8000)")
    p_serve.add_argument("--host", default="127.0.0.1", help="호스트 (기본: 127.0.0.1)")
    p_serve.add_argument(
        "--env-file",
        default=None,
        help="API 키 등을 담은 .env 경로 (생략 시 프로젝트 루트 .env)",
    )
    p_serve.add_argument("--verbose", "-v", action="store_true", help="디버그 로그 출력")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        import uvicorn
        from app.server import configure

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if args.env_file and not Path(args.env_file).exists():
            print(
                f"오류: 설정 파일을 찾을 수 없습니다: {args.env_file}\n"
                "→ 해결: .env.example을 복사하여 .env를 만드세요.",
                file=sys.stderr,
            )
            sys.exit(1)

        configure(args.env_file)

        print(f"서버: http://{args.host}:{args.port}")
        uvicorn.run(
            "app.server:app",
            host=args.host,
            port=args.port,
            reload=False,
        )


if __name__ == "__main__":
    main()
