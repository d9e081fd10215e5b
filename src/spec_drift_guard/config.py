"""
Configuration Management

Guard settings, loaded once at startup from GitHub Actions inputs
or a YAML file, then passed explicitly into the core.
"""

import os
import re
import yaml
from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Optional, Dict, Any, Mapping
from pathlib import Path
import logging


DEFAULT_AC_PATTERN = "AC-[0-9]+"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigurationError(Exception):
    """Invalid or missing configuration (pattern, credential, coordinates)."""


class GitHubConfig(BaseModel):
    """GitHub API 설정"""
    model_config = ConfigDict(strict=True, extra='forbid', validate_assignment=True)

    token: Optional[str] = None
    api_base_url: str = DEFAULT_API_URL
    page_size: int = 100
    timeout_seconds: Optional[int] = None
    max_retries: int = 0


class PolicyConfig(BaseModel):
    """Gate policy"""
    model_config = ConfigDict(strict=True, extra='forbid', validate_assignment=True)

    ac_pattern: str = DEFAULT_AC_PATTERN
    require_at_least_one: bool = False
    fail_on_missing_coverage: bool = True
    emit_summary: bool = True


class LoggingConfig(BaseModel):
    """로깅 설정"""
    model_config = ConfigDict(strict=True, extra='forbid', validate_assignment=True)

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


def _to_bool(value: Optional[str], fallback: bool) -> bool:
    """Action-input boolean: unset or empty keeps the fallback."""
    if value is None or value == "":
        return fallback
    return str(value).lower() == "true"


def _get_input(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(f"INPUT_{name.replace(' ', '_').upper()}")
    return value if value != "" else None


@dataclass
class GuardConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    event_path: Optional[str] = None
    repository: Optional[str] = None
    summary_path: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GuardConfig":
        """Load settings from action inputs and the runner environment."""
        env = os.environ if environ is None else environ
        return cls(
            github=GitHubConfig(
                token=_get_input(env, "token"),
                api_base_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            ),
            policy=PolicyConfig(
                ac_pattern=_get_input(env, "ac_regex") or DEFAULT_AC_PATTERN,
                require_at_least_one=_to_bool(_get_input(env, "require_ac"), False),
                fail_on_missing_coverage=_to_bool(_get_input(env, "fail_on_missing"), True),
                emit_summary=_to_bool(_get_input(env, "summary"), True),
            ),
            logging=LoggingConfig(
                level=env.get("LOG_LEVEL") or "INFO",
                file_path=env.get("LOG_FILE") or None,
            ),
            event_path=env.get("GITHUB_EVENT_PATH") or None,
            repository=env.get("GITHUB_REPOSITORY") or None,
            summary_path=env.get("GITHUB_STEP_SUMMARY") or None,
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "GuardConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        for key in ('event_path', 'repository', 'summary_path'):
            value = config_data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    f"Invalid config file {config_path}: {key} must be a string"
                )

        # 섹션 값은 YAML 타입 그대로 검증 (문자열 'false' 등은 거부)
        try:
            return cls(
                github=GitHubConfig(**config_data.get('github', {})),
                policy=PolicyConfig(**config_data.get('policy', {})),
                logging=LoggingConfig(**config_data.get('logging', {})),
                event_path=config_data.get('event_path'),
                repository=config_data.get('repository'),
                summary_path=config_data.get('summary_path'),
            )
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.token:
            errors.append("Missing required input: token")

        try:
            compiled = re.compile(self.policy.ac_pattern, re.ASCII)
        except re.error as e:
            errors.append(f"Invalid AC pattern {self.policy.ac_pattern!r}: {e}")
        else:
            if compiled.fullmatch("") is not None:
                errors.append(f"AC pattern {self.policy.ac_pattern!r} matches the empty string")

        if self.github.page_size <= 0:
            errors.append("Page size must be positive")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'page_size': self.github.page_size,
                'timeout_seconds': self.github.timeout_seconds,
                'max_retries': self.github.max_retries,
                # 보안상 토큰은 제외
            },
            'policy': {
                'ac_pattern': self.policy.ac_pattern,
                'require_at_least_one': self.policy.require_at_least_one,
                'fail_on_missing_coverage': self.policy.fail_on_missing_coverage,
                'emit_summary': self.policy.emit_summary,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'event_path': self.event_path,
            'repository': self.repository,
            'summary_path': self.summary_path,
        }


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))

        # 루트 로거에 핸들러 추가
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
