"""
명령줄 진입점 모듈

repo/script 명령을 파싱해 ScriptManager에 전달하고 결과를 출력합니다.
도메인 예외는 한 줄 메시지로, 예기치 않은 예외는 잘린 트레이스백과 함께 출력합니다.
"""

import argparse
import asyncio
import sys
import traceback
from typing import List, Optional

from .config.settings import Settings, get_settings
from .exceptions import ScriptManagerException
from .scripts.manager import ScriptManager
from .utils.helpers import truncate_string
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# 예기치 않은 오류 시 출력할 트레이스백 프레임 수
TRACE_FRAMES = 5


def build_parser() -> argparse.ArgumentParser:
    """명령줄 파서 생성"""
    parser = argparse.ArgumentParser(prog="scriptpm", description="스크립트 저장소 패키지 관리자")
    groups = parser.add_subparsers(dest="group", required=True)

    repo = groups.add_parser("repo", help="저장소 관리")
    repo_commands = repo.add_subparsers(dest="command", required=True)
    repo_commands.add_parser("list", help="등록된 저장소 목록")
    repo_add = repo_commands.add_parser("add", help="저장소 등록")
    repo_add.add_argument("name")
    repo_add.add_argument("url")
    repo_info = repo_commands.add_parser("info", help="저장소 정보")
    repo_info.add_argument("name")
    repo_rm = repo_commands.add_parser("rm", help="저장소 삭제")
    repo_rm.add_argument("name")

    script = groups.add_parser("script", help="스크립트 관리")
    script_commands = script.add_subparsers(dest="command", required=True)
    script_list = script_commands.add_parser("list", help="사용 가능한 스크립트 목록")
    script_list.add_argument("--repo")
    for command, help_text in (("info", "스크립트 정보"), ("install", "스크립트 설치"), ("update", "스크립트 업데이트")):
        sub = script_commands.add_parser(command, help=help_text)
        sub.add_argument("--repo")
        sub.add_argument("name")

    return parser


async def run_command(args: argparse.Namespace, settings: Settings) -> int:
    """파싱된 명령 실행"""
    async with ScriptManager(settings) as manager:
        if args.group == "repo":
            return await _run_repo_command(manager, args)
        return await _run_script_command(manager, args)


async def _run_repo_command(manager: ScriptManager, args: argparse.Namespace) -> int:
    if args.command == "list":
        repositories = manager.repo_list()
        if not repositories:
            print("등록된 저장소가 없습니다")
        for repository in repositories:
            print(f"{repository.name}\t{repository.url}")

    elif args.command == "add":
        repository = await manager.repo_add(args.name, args.url)
        print(f"저장소 등록: {repository.name} -> {repository.url}")

    elif args.command == "info":
        result = await manager.repo_info(args.name)
        repository = result.repository
        print(f"이름: {repository.name}")
        print(f"URL: {repository.url}")
        print(f"상태: {result.status.value}")
        if result.ok:
            print(f"스크립트: {len(repository.available)}개")
        else:
            print(f"오류: {result.message}")

    elif args.command == "rm":
        await manager.repo_remove(args.name)
        print(f"저장소 삭제: {args.name}")

    return 0


async def _run_script_command(manager: ScriptManager, args: argparse.Namespace) -> int:
    if args.command == "list":
        scripts = await manager.script_list(args.repo)
        if not scripts:
            print("사용 가능한 스크립트가 없습니다")
        for script in scripts:
            status = ""
            if script['installed']:
                status = "구버전" if script['outdated'] else "설치됨"
            print(f"{script['repository']}\t{script['name']}\t{script['updated_at']}\t{status}".rstrip())

    elif args.command == "info":
        info = await manager.script_info(args.name, args.repo)
        print(f"스크립트: {info['name']}")
        print(f"저장소: {info['repository']}")
        print(f"수정 시각: {info['updated_at']}")
        print(f"MD5: {info['md5'] or '-'}")
        print(f"설치 경로: {info['local_path']}{' (설치됨)' if info['installed'] else ''}")
        print()
        print(info['header'])

    elif args.command == "install":
        path = await manager.script_install(args.name, args.repo)
        print(f"설치 완료: {path}")

    elif args.command == "update":
        path = await manager.script_update(args.name, args.repo)
        print(f"업데이트 완료: {path}")

    return 0


def format_unexpected_error(error: BaseException) -> str:
    """예기치 않은 오류 메시지와 마지막 몇 개의 트레이스백 프레임"""
    # 반복 프레임이 한 줄로 합쳐지지 않도록 프레임마다 따로 형식화
    frames = [
        "".join(traceback.format_list([frame]))
        for frame in traceback.extract_tb(error.__traceback__)[-TRACE_FRAMES:]
    ]
    message = truncate_string(str(error) or type(error).__name__, 500)
    return f"예기치 않은 오류: {type(error).__name__}: {message}\n" + "".join(frames)


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """
    명령줄 메인 함수

    Args:
        argv: 명령줄 인자 (None이면 sys.argv 사용)
        settings: 시스템 설정 (None이면 환경 변수에서 로드)

    Returns:
        종료 코드 (0 성공, 1 도메인 오류, 2 예기치 않은 오류)
    """
    args = build_parser().parse_args(argv)

    try:
        if settings is None:
            settings = get_settings()
        setup_logging(settings)
        return asyncio.run(run_command(args, settings))

    except ScriptManagerException as e:
        logger.debug(f"명령 실패: {e.error_code} - {e.message}")
        print(f"오류: {e.message}", file=sys.stderr)
        return 1

    except Exception as e:
        print(format_unexpected_error(e), file=sys.stderr, end="")
        return 2


if __name__ == "__main__":
    sys.exit(main())
