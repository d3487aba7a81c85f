import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.treeviz.json."""
    path = tmp_path / "treeviz-settings.json"
    monkeypatch.setenv("TREEVIZ_SETTINGS", str(path))
    return path


@pytest.fixture(params=["avl", "redblack"])
def kind(request):
    return request.param
