# hostbind/runtime/options.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from dataclasses import dataclass

from hostbind.core.types import SType


@dataclass
class ProcessOptions:
    """
    Process-wide override state shared by the exposed functions.

    Attributes:
        force_stype: When not VOID, columns created by the storage layer use
            this stype instead of the detected one.
    """

    force_stype: SType = SType.VOID

    def reset(self) -> None:
        """Restore every override to its default."""
        self.force_stype = SType.VOID
