from unittest import mock

import pytest

from keygraph import adapters


class TestAdapterRegistry:
    def test_exported_symbols(self):
        assert adapters.exported_symbols() == {"to_nx": "networkx", "from_nx": "networkx"}

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="known: networkx"):
            adapters.load_adapter("graphml")

    def test_missing_library_names_the_extra(self):
        with mock.patch.object(adapters.util, "find_spec", return_value=None):
            assert adapters.available_backends() == {"networkx": False}
            with pytest.raises(ModuleNotFoundError, match=r"keygraph\[networkx\]"):
                adapters.load_adapter("networkx")
            with pytest.raises(ModuleNotFoundError):
                adapters.resolve("to_nx")
