"""
예외 클래스 정의 모듈

스크립트 패키지 관리자에서 사용되는 커스텀 예외들을 정의합니다.
"""

from typing import List, Optional


class ScriptManagerException(Exception):
    """스크립트 패키지 관리자 기본 예외 클래스"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        예외 초기화

        Args:
            message: 오류 메시지
            error_code: 오류 코드 (선택사항)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationException(ScriptManagerException):
    """설정 오류 시 발생하는 예외"""

    def __init__(self, config_key: str, error_detail: str):
        """
        설정 예외 초기화

        Args:
            config_key: 설정 키
            error_detail: 오류 상세 정보
        """
        message = f"설정 오류: {config_key} - {error_detail}"
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.error_detail = error_detail


class ConfigParseException(ConfigurationException):
    """저장소 설정 파일 파싱 실패 예외"""

    def __init__(self, path: str, error_detail: str):
        super().__init__(path, f"설정 파일 파싱 실패: {error_detail}")
        self.error_code = "CONFIG_PARSE_ERROR"
        self.path = path


class InvalidRepositoryUrlException(ConfigurationException):
    """저장소 URL이 HTTP(S) 주소가 아닐 때 발생하는 예외"""

    def __init__(self, url: object):
        super().__init__("url", f"HTTP(S) URL이 아닙니다: {url!r}")
        self.error_code = "INVALID_REPOSITORY_URL"
        self.url = url


class InvalidRepositoryNameException(ConfigurationException):
    """저장소 이름이 비어 있거나 경로 구분자를 포함할 때 발생하는 예외"""

    def __init__(self, name: object):
        super().__init__("name", f"사용할 수 없는 저장소 이름입니다: {name!r}")
        self.error_code = "INVALID_REPOSITORY_NAME"
        self.name = name


class RepositoryExistsException(ConfigurationException):
    """같은 이름의 저장소가 이미 존재할 때 발생하는 예외"""

    def __init__(self, name: str):
        super().__init__(name, "이미 존재하는 저장소입니다")
        self.error_code = "REPOSITORY_EXISTS"
        self.name = name


class RepositoryNotFoundException(ConfigurationException):
    """저장소를 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, name: str):
        super().__init__(name, "저장소를 찾을 수 없습니다")
        self.error_code = "REPOSITORY_NOT_FOUND"
        self.name = name


class NetworkException(ScriptManagerException):
    """원격 저장소와의 통신 실패 예외"""

    def __init__(self, repository_name: str, error_detail: str):
        """
        네트워크 예외 초기화

        Args:
            repository_name: 저장소 이름 또는 URL
            error_detail: 오류 상세 정보
        """
        message = f"네트워크 오류 ({repository_name}): {error_detail}"
        super().__init__(message, "NETWORK_ERROR")
        self.repository_name = repository_name
        self.error_detail = error_detail


class TransferException(NetworkException):
    """스크립트 파일 전송 실패 예외"""

    def __init__(self, url: str, error_detail: str):
        super().__init__(url, f"파일 전송 실패: {error_detail}")
        self.error_code = "TRANSFER_ERROR"
        self.url = url


class ManifestException(ScriptManagerException):
    """매니페스트 형식 오류 예외"""

    def __init__(self, repository_name: str, error_detail: str):
        """
        매니페스트 예외 초기화

        Args:
            repository_name: 저장소 이름
            error_detail: 오류 상세 정보
        """
        message = f"잘못된 매니페스트 ({repository_name}): {error_detail}"
        super().__init__(message, "MANIFEST_ERROR")
        self.repository_name = repository_name
        self.error_detail = error_detail


class ResolutionException(ScriptManagerException):
    """스크립트를 제공할 저장소를 하나로 결정할 수 없을 때의 기본 예외"""

    def __init__(self, script_name: str, message: str, error_code: str):
        super().__init__(message, error_code)
        self.script_name = script_name


class ScriptNotAdvertisedException(ResolutionException):
    """지정한 저장소가 스크립트를 제공하지 않을 때 발생하는 예외"""

    def __init__(self, script_name: str, repository_name: str):
        message = f"저장소 {repository_name}에서 제공하지 않는 스크립트입니다: {script_name}"
        super().__init__(script_name, message, "SCRIPT_NOT_ADVERTISED")
        self.repository_name = repository_name


class AmbiguousScriptException(ResolutionException):
    """여러 저장소가 같은 스크립트를 제공할 때 발생하는 예외"""

    def __init__(self, script_name: str, repository_names: List[str]):
        names = ", ".join(repository_names)
        message = (
            f"모호한 스크립트: {script_name} - 여러 저장소에서 제공합니다 ({names}). "
            f"--repo=<이름> 으로 저장소를 지정하세요"
        )
        super().__init__(script_name, message, "AMBIGUOUS_SCRIPT")
        self.repository_names = repository_names


class ScriptNotFoundException(ResolutionException):
    """어느 저장소에서도 스크립트를 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, script_name: str):
        message = f"스크립트를 찾을 수 없습니다: {script_name}"
        super().__init__(script_name, message, "SCRIPT_NOT_FOUND")


class ScriptAlreadyInstalledException(ScriptManagerException):
    """설치 대상 경로에 파일이 이미 존재할 때 발생하는 예외"""

    def __init__(self, script_name: str, path: str):
        """
        설치 중복 예외 초기화

        Args:
            script_name: 스크립트 이름
            path: 이미 존재하는 로컬 경로
        """
        message = (
            f"이미 설치된 스크립트입니다: {script_name} ({path}). "
            f"덮어쓰려면 'script update {script_name}' 을 사용하세요"
        )
        super().__init__(message, "SCRIPT_ALREADY_INSTALLED")
        self.script_name = script_name
        self.path = path
