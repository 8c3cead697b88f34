# tests/bootstrap_installer/test_bs_scaffold.py
from bootstrap_installer.bs_scaffold import scaffold_project
from common.step_models import StepStatus
from installer.config import DEFAULT_INVENTORY_CONTENT, DEFAULT_PLAYBOOK_CONTENT


def test_scaffold_creates_layout(app_settings, mock_logger):
    context = {}

    outcome = scaffold_project(context, app_settings, mock_logger)

    root = app_settings.project_dir
    for name in ("inventory", "group_vars", "host_vars", "roles"):
        assert (root / name).is_dir()
    assert (root / "inventory" / "hosts.ini").read_text(encoding="utf-8") == (
        "[local]\nlocalhost ansible_connection=local\n"
    )
    assert (root / "site.yml").read_text(encoding="utf-8") == DEFAULT_PLAYBOOK_CONTENT
    assert outcome.status == StepStatus.CHANGED
    assert context["project_layout"] == app_settings.layout


def test_scaffold_is_idempotent(app_settings, mock_logger):
    scaffold_project({}, app_settings, mock_logger)

    outcome = scaffold_project({}, app_settings, mock_logger)

    assert outcome.status == StepStatus.UNCHANGED


def test_scaffold_preserves_edited_files(app_settings, mock_logger):
    root = app_settings.project_dir
    (root / "inventory").mkdir(parents=True)
    (root / "inventory" / "hosts.ini").write_text("[web]\nweb01\n", encoding="utf-8")
    (root / "site.yml").write_text("# mine\n", encoding="utf-8")

    outcome = scaffold_project({}, app_settings, mock_logger)

    assert (root / "inventory" / "hosts.ini").read_text(encoding="utf-8") == "[web]\nweb01\n"
    assert (root / "site.yml").read_text(encoding="utf-8") == "# mine\n"
    assert (root / "roles").is_dir()
    assert outcome.status == StepStatus.CHANGED


def test_scaffold_custom_inventory_location(app_settings, mock_logger):
    custom = app_settings.project_dir / "hosts" / "local.ini"
    settings = app_settings.model_copy(update={"inventory_file": custom})

    scaffold_project({}, settings, mock_logger)

    assert custom.read_text(encoding="utf-8") == DEFAULT_INVENTORY_CONTENT
