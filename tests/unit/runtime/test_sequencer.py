# tests/unit/runtime/test_sequencer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Unit tests for hostbind.runtime.sequencer module."""
import logging
import unittest
from unittest.mock import MagicMock

import pytest

from hostbind.core.errors import SubsystemInitializationError
from hostbind.core.types import SType
from hostbind.runtime.module import ExtensionModule
from hostbind.runtime.sequencer import EXPOSED_TYPES, InitStatus, ModuleInitializer


class TestInitStatus(unittest.TestCase):
    """Test cases for InitStatus enum."""

    def test_states_exist(self):
        for name in (
            "UNSTARTED",
            "CONSTANTS_INSTALLED",
            "EXCEPTIONS_INSTALLED",
            "SUBSYSTEMS_INITIALIZING",
            "TYPES_INSTALLED",
            "READY",
            "FAILED",
        ):
            self.assertTrue(hasattr(InitStatus, name))

    def test_states_are_unique(self):
        self.assertEqual(len(list(InitStatus)), len({s.value for s in InitStatus}))


class RecordingSubsystem:
    def __init__(self, name, log, result=True):
        self.name = name
        self._log = log
        self._result = result

    def static_init(self, module):
        self._log.append((self.name, module))
        return self._result


class TestModuleInitializer:
    def test_successful_run(self):
        log = []
        initializer = ModuleInitializer(subsystems=[RecordingSubsystem("a", log), RecordingSubsystem("b", log)])
        module = initializer.run()
        assert isinstance(module, ExtensionModule)
        assert initializer.status is InitStatus.READY
        assert [name for name, _ in log] == ["a", "b"]
        assert all(m is module for _, m in log)

    def test_surface_installed(self, module):
        assert "DIGIT_PAIRS" in module.WRITER_CONSTANTS
        assert module.MissingArgumentError.__name__ == "MissingArgumentError"
        for name, cls in EXPOSED_TYPES:
            assert getattr(module, name) is cls
        for fn in ("_register_function", "has_omp_support", "in_debug_mode",
                   "frame_column_rowindex", "frame_column_data_r", "ingest", "_force_stype"):
            assert fn in module.methods

    def test_options_reset(self, module):
        assert module.context.options.force_stype is SType.VOID

    def test_subsystem_returning_false_aborts(self):
        log = []
        subsystems = [RecordingSubsystem("a", log, False), RecordingSubsystem("b", log)]
        initializer = ModuleInitializer(subsystems=subsystems)
        assert initializer.run() is None
        assert initializer.status is InitStatus.FAILED
        assert [name for name, _ in log] == ["a"]

    def test_subsystem_exception_is_wrapped(self):
        broken = MagicMock()
        broken.name = "broken"
        broken.static_init.side_effect = OSError("disk on fire")
        initializer = ModuleInitializer(subsystems=[broken])
        with pytest.raises(ImportError) as exc_info:
            initializer.initialize()
        cause = exc_info.value.__cause__
        assert isinstance(cause, SubsystemInitializationError)
        assert cause.details == {"subsystem": "broken"}
        assert isinstance(cause.__cause__, OSError)

    def test_type_install_failure(self):
        # Two types under the same name cannot both be installed.
        types = (("Thing", int), ("Thing", float))
        initializer = ModuleInitializer(subsystems=[], exposed_types=types)
        assert initializer.run() is None
        assert initializer.status is InitStatus.FAILED

    def test_failure_is_logged(self, caplog):
        initializer = ModuleInitializer(subsystems=[RecordingSubsystem("bad", [], False)])
        with caplog.at_level(logging.ERROR, logger="hostbind.runtime.sequencer"):
            initializer.run()
        assert any("failed after SUBSYSTEMS_INITIALIZING" in r.getMessage() for r in caplog.records)

    def test_runs_only_once(self):
        initializer = ModuleInitializer(subsystems=[])
        initializer.initialize()
        with pytest.raises(ValueError):
            initializer.initialize()

    def test_steps_in_order(self):
        seen = []

        def init_methods(module):
            seen.append(("methods", initializer.status))

        class Probe:
            name = "probe"

            def static_init(self, module):
                seen.append(("subsystem", initializer.status))
                return True

        initializer = ModuleInitializer(subsystems=[Probe()], init_methods=init_methods, exposed_types=())
        initializer.initialize()
        assert seen == [
            ("methods", InitStatus.SUBSYSTEMS_INITIALIZING),
            ("subsystem", InitStatus.SUBSYSTEMS_INITIALIZING),
        ]

    def test_independent_modules(self):
        first = ModuleInitializer().initialize()
        second = ModuleInitializer().initialize()
        assert first is not second
        assert first.context.registry is not second.context.registry
