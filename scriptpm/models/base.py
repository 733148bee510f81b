"""
기본 데이터 모델 모듈

저장소, 스크립트 자산, 매니페스트 조회 결과 데이터 구조를 정의합니다.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .enums import FetchStatus


class ScriptAsset(BaseModel):
    """매니페스트에 기재된 스크립트 자산 데이터 모델"""

    file: str = Field(
        ...,
        description="원격 저장소에서 자산을 가리키는 경로 (예: /foo.lic)",
        min_length=1
    )
    md5: Optional[str] = Field(
        None,
        description="콘텐츠 체크섬 (MD5)"
    )
    last_commit: float = Field(
        default=0,
        description="마지막 수정 시각 (epoch 초, 소수 허용)"
    )
    header: Optional[str] = Field(
        None,
        description="문서 조각 경로"
    )

    @field_validator('last_commit', mode='before')
    @classmethod
    def default_last_commit(cls, v: Any) -> Any:
        """null은 알 수 없는 시각(0)으로 처리"""
        return 0 if v is None else v

    @property
    def filename(self) -> str:
        """자산 경로의 마지막 경로 요소 (기본 파일명)"""
        return self.file.rstrip("/").rsplit("/", 1)[-1]


class Repository(BaseModel):
    """원격 스크립트 저장소 데이터 모델"""

    name: str = Field(
        ...,
        description="저장소 고유 이름",
        min_length=1
    )
    url: str = Field(
        ...,
        description="저장소 기본 HTTP(S) URL"
    )
    available: Optional[List[ScriptAsset]] = Field(
        default=None,
        description="매니페스트 조회 후 채워지는 자산 목록 (조회 전에는 None)"
    )
    err: Optional[str] = Field(
        default=None,
        description="마지막 매니페스트 조회 오류 메시지"
    )

    def persisted(self) -> Dict[str, Any]:
        """설정 파일에 저장되는 필드만 반환"""
        return {"url": self.url}

    def find_asset(self, filename: str) -> Optional[ScriptAsset]:
        """기본 파일명이 일치하는 자산 반환 (없으면 None)"""
        for asset in self.available or []:
            if asset.filename == filename:
                return asset
        return None


class FetchResult(BaseModel):
    """매니페스트 조회 결과 (태그된 결과)"""

    status: FetchStatus = Field(
        ...,
        description="조회 결과 상태"
    )
    repository: Repository = Field(
        ...,
        description="조회 결과가 반영된 저장소"
    )
    message: Optional[str] = Field(
        default=None,
        description="실패 시 오류 메시지"
    )

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.OK
