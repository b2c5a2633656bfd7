"""
명령행 진입점

설정은 pr_changelog.main 임포트 시점에 환경 변수에서 읽힌다.
이 모듈은 설정을 읽지 않고 시작하므로 설정 오류도 같은 방식으로 보고할 수 있다.
"""

import sys

from pydantic import ValidationError

from pr_changelog.core.exceptions import ConfigurationError, format_failure


def _escape_annotation(message: str) -> str:
    """GitHub Actions 워크플로 명령 메시지 이스케이프"""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str) -> None:
    """GitHub Actions에 실패 annotation 출력"""
    sys.stdout.write(f"::error::{_escape_annotation(message)}\n")
    sys.stdout.flush()


def describe_settings_error(error: ValidationError) -> str:
    """설정 검증 오류를 환경 변수 이름 목록으로 변환"""
    names = []
    for item in error.errors():
        name = str(item["loc"][0]).upper() if item["loc"] else "SETTINGS"
        names.append(f"{name} ({item['msg']})")
    return f"잘못된 설정: {', '.join(names)}"


def _load_main():
    from pr_changelog.main import main

    return main


def cli() -> int:
    """pr-changelog 명령 실행, 실패 시 종료 코드 1 반환"""
    try:
        main = _load_main()
    except ValidationError as e:
        report_failure(format_failure(ConfigurationError(detail=describe_settings_error(e))))
        return 1
    return main()
