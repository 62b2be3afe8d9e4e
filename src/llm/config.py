"""LLM 설정 관리.

설정 우선순위: 환경변수 → .env 파일 → 기본값.
"""

import os
from pathlib import Path
from typing import Optional


class LlmConfig:
    """LLM 설정 관리.

    설정 우선순위: 환경변수 → .env 파일 → 기본값.

    사용법:
        config = LlmConfig()
        api_key = config.get_api_key("deepseek")
        ollama_url = config.get("ollama_url")

        # 테스트나 별도 작업 폴더에서는 .env 경로를 직접 지정
        config = LlmConfig(env_file=Path("./work/.env"))
    """

    DEFAULTS = {
        "deepseek_url": "https://api.deepseek.com",
        "deepseek_model": "deepseek-chat",
        "ollama_url": "http://localhost:11434",
        "ollama_model": "qwen2.5:7b",
        # 繁→簡 LLM 변환에 쓸 provider. "auto"면 라우터 폴백 순서를 따른다.
        "convert_provider": "deepseek",
        "llm_timeout": 120.0,
    }

    # 환경변수명 매핑
    API_KEY_ENV = {
        "deepseek": "DEEPSEEK_API_KEY",
    }

    def __init__(self, env_file: Optional[Path] = None):
        self._env_cache: dict = {}

        # .env 로드 순서: 프로젝트 루트 → env_file
        # env_file이 프로젝트 루트 .env의 값을 덮어쓴다.
        project_root = Path(__file__).resolve().parent.parent.parent  # src/llm/config.py → 프로젝트 루트
        project_env = project_root / ".env"
        if project_env.exists():
            self._env_cache = self._load_dotenv(project_env)

        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                self._env_cache.update(self._load_dotenv(env_file))

    def _load_dotenv(self, path: Path) -> dict:
        """간단한 .env 파서. python-dotenv 없이 동작."""
        result = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip("'\"")
            result[key] = value
        return result

    def get_api_key(self, provider: str) -> Optional[str]:
        """API 키 조회. 환경변수 → .env → None."""
        env_name = self.API_KEY_ENV.get(provider)
        if not env_name:
            return None
        return os.environ.get(env_name) or self._env_cache.get(env_name)

    def get(self, key: str, default=None):
        """설정값 조회. 환경변수(대문자) → .env → DEFAULTS → default."""
        env_key = key.upper()
        val = os.environ.get(env_key) or self._env_cache.get(env_key)
        if val is not None:
            return val
        return self.DEFAULTS.get(key, default)

    def get_float(self, key: str, default: float = 0.0) -> float:
        """숫자 설정값 조회. 환경변수는 문자열이므로 변환한다.

        변환할 수 없으면 DEFAULTS 값(없으면 default)을 쓴다.
        """
        val = self.get(key, default)
        try:
            return float(val)
        except (TypeError, ValueError):
            return float(self.DEFAULTS.get(key, default))
