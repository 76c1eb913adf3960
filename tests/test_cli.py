"""
Tests for the command line entry point.
"""
from notion_uml.__main__ import main
from notion_uml.encoding import Base64UrlEncoder, PlantUMLEncoder

SOURCE = "@startuml\nA -> B: hi\n@enduml\n"


def test_encode_from_file(tmp_path, capsys):
    src = tmp_path / "d.puml"
    src.write_text(SOURCE, encoding="utf-8")
    assert main(["encode", str(src)]) == 0
    assert capsys.readouterr().out.strip() == Base64UrlEncoder().encode(SOURCE)


def test_encode_plantuml_backend(tmp_path, capsys):
    src = tmp_path / "d.puml"
    src.write_text(SOURCE, encoding="utf-8")
    assert main(["encode", "--backend", "plantuml", str(src)]) == 0
    assert PlantUMLEncoder().decode(capsys.readouterr().out.strip()) == SOURCE


def test_url(tmp_path, capsys):
    src = tmp_path / "d.puml"
    src.write_text(SOURCE, encoding="utf-8")
    assert main(["url", "--format", "png", str(src)]) == 0
    token = Base64UrlEncoder().encode(SOURCE)
    assert capsys.readouterr().out.strip() == f"https://kroki.io/plantuml/png/{token}"


def test_url_custom_render_url(tmp_path, capsys):
    src = tmp_path / "d.puml"
    src.write_text(SOURCE, encoding="utf-8")
    assert main(["url", "--backend", "plantuml", "--render-url", "http://localhost:8080/", str(src)]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("http://localhost:8080/svg/")


def test_serve_without_access_key(monkeypatch, capsys):
    monkeypatch.delenv("NOTION_ACCESS_KEY", raising=False)
    assert main(["serve"]) == 2
    assert "NOTION_ACCESS_KEY" in capsys.readouterr().err
