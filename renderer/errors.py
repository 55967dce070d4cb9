"""처리 단계별 예외 정의."""


class ProcessingError(Exception):
    """이미지 처리 실행 실패의 공통 부모."""


class LoadError(ProcessingError):
    """이미지 소스를 가져오거나 디코딩할 수 없음."""


class CompositeError(ProcessingError):
    """설정값에서 유도된 합성 지오메트리가 유효하지 않음."""


class EncodeError(ProcessingError):
    """결과 이미지 인코딩 실패."""
