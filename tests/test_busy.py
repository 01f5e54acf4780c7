"""
Unit tests for the shared busy flag
"""

import pytest

from clustering_map.errors import WorkflowBusyError
from clustering_map.workflow import BusyFlag


class TestBusyFlag:
    def test_set_only_while_held(self):
        flag = BusyFlag()
        assert not flag
        with flag.hold("upload"):
            assert flag.is_set
            assert flag.owner == "upload"
        assert not flag.is_set
        assert flag.owner is None

    def test_second_acquisition_is_rejected(self):
        flag = BusyFlag()
        with flag.hold("upload"):
            with pytest.raises(WorkflowBusyError):
                with flag.hold("run_analysis"):
                    pass
            assert flag.owner == "upload"

    def test_released_when_body_raises(self):
        flag = BusyFlag()
        with pytest.raises(RuntimeError):
            with flag.hold("upload"):
                raise RuntimeError("transport blew up")
        assert not flag.is_set

    def test_release_frees_flag_for_next_holder(self):
        flag = BusyFlag()
        with flag.hold("load_tag_dictionary"):
            flag.release()
            assert not flag.is_set
            with flag.hold("complete_mapping"):
                assert flag.owner == "complete_mapping"
        assert not flag.is_set

    def test_abandoned_hold_does_not_clear_newer_holder(self):
        flag = BusyFlag()
        old = flag.hold("load_tag_dictionary")
        old.__enter__()
        flag.release()

        new = flag.hold("run_analysis")
        new.__enter__()
        old.__exit__(None, None, None)
        assert flag.owner == "run_analysis"

        new.__exit__(None, None, None)
        assert not flag.is_set
