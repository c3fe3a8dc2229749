"""
Fake Program Generator for Testing.

Part of AMA-617: Regenerate program at cycle end
"""
from typing import List, Optional, Tuple

from application.ports import GeneratedProgram
from domain.models import UserProfile


class FakeProgramGenerator:
    """
    Returns a preset program and records every call.

    Set `error` to make generate_program() raise it.
    """

    def __init__(self, program: Optional[GeneratedProgram] = None):
        self.program = program
        self.error: Optional[Exception] = None
        self.calls: List[Tuple[str, Optional[str]]] = []

    async def generate_program(
        self,
        profile: UserProfile,
        template: Optional[str] = None,
    ) -> GeneratedProgram:
        self.calls.append((profile.user_id, template))
        if self.error is not None:
            raise self.error
        if self.program is None:
            raise RuntimeError("FakeProgramGenerator has no program configured")
        return self.program
