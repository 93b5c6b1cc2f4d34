import pytest

import romcatalog.cli as cli
from romcatalog.config.loader import ConfigError


@pytest.fixture
def cli_config(make_config, tmp_path):
    (tmp_path / "games").mkdir(exist_ok=True)
    return make_config()


def test_create_parser_browse_flags():
    parser = cli.create_parser()
    args = parser.parse_args(["browse", "--station", "2", "--search", "zel", "--sort", "size_desc",
                              "--page-size", "8", "--select", "3"])
    assert args.command == "browse"
    assert args.station == 2
    assert args.search == "zel"
    assert args.sort == "size_desc"
    assert args.page_size == 8
    assert args.select == 3


def test_create_parser_rejects_unknown_sort():
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args(["browse", "--sort", "random"])


def test_main_handles_config_error(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda path=None: (_ for _ in ()).throw(ConfigError("bad config")))
    code = cli.main(["scan"])
    assert code == 1


def test_main_handles_validation_error(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda path=None: {"paths": {}})
    assert cli.main(["scan"]) == 1


@pytest.mark.integration
def test_add_scan_and_browse(cli_config, tmp_path, capsys):
    rom_dir = tmp_path / "games" / "NES"
    rom_dir.mkdir(parents=True)
    (rom_dir / "Zelda_II.nes").write_bytes(b"\0" * 4096)
    (rom_dir / "readme.txt").write_text("ignore")

    assert cli.main(["--config", str(cli_config), "stations", "add", "--template", "NES"]) == 0
    assert (tmp_path / "games" / "rom_stations.yaml").exists()

    assert cli.main(["--config", str(cli_config), "browse", "--sort", "name_asc"]) == 0
    out = capsys.readouterr().out
    assert "[NES] Zelda II" in out
    assert "readme" not in out
    assert "core=_NES" in out


@pytest.mark.integration
def test_add_with_unknown_template_fails(cli_config):
    assert cli.main(["--config", str(cli_config), "stations", "add", "--template", "NOPE"]) == 1


@pytest.mark.integration
def test_remove_unknown_station_fails(cli_config):
    assert cli.main(["--config", str(cli_config), "stations", "remove", "4"]) == 1


@pytest.mark.integration
def test_previews_clear(cli_config, tmp_path):
    cached = tmp_path / "games" / "previews" / "NES" / "Zelda II.png"
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"png")

    assert cli.main(["--config", str(cli_config), "previews", "clear"]) == 0
    assert not cached.exists()
