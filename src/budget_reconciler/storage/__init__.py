# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from budget_reconciler.storage.interface import RecordSource
from budget_reconciler.storage.memory import MemoryRecordStore

__all__ = ["RecordSource", "MemoryRecordStore"]
