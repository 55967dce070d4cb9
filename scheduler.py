"""실행 순서 관리 모듈 — 디바운스 지연과 세대(generation) 카운터."""

import asyncio


class RunScheduler:
    """합성 실행의 세대를 관리한다.

    입력이 바뀔 때마다 세대가 1 증가한다. 실행은 시작 시점의 세대를
    기억해 두고, 완료 시점에 세대가 그대로일 때만 결과를 반영한다.
    """

    def __init__(self, debounce_sec: float = 0.1):
        self._debounce = debounce_sec
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def debounce_sec(self) -> float:
        return self._debounce

    def next_generation(self) -> int:
        """새 실행을 위한 세대 번호를 발급한다 (이전 실행은 모두 stale)."""
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        """해당 세대가 아직 최신인지 확인한다."""
        return generation == self._generation

    async def wait_debounce(self) -> None:
        """연속 입력을 묶기 위해 디바운스 시간만큼 대기한다."""
        if self._debounce > 0:
            await asyncio.sleep(self._debounce)

    def reset(self):
        """진행 중인 모든 실행을 stale로 만든다."""
        self.next_generation()
