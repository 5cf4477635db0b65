from bookstore_e2e.common.log_setup import ensure_directory


def test_ensure_directory_creates_nested_path(tmp_path):
    target = tmp_path / "reports" / "screenshots"

    directory = ensure_directory(str(target))

    assert directory == target
    assert directory.is_dir()


def test_ensure_directory_is_idempotent(tmp_path):
    ensure_directory(tmp_path / "logs")

    assert ensure_directory(tmp_path / "logs").is_dir()
