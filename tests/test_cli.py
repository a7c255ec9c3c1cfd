import argparse
from datetime import datetime
from pathlib import Path

import pytest

from tasktracker.cli import build_parser, main, parse_date, run, switch_task
from tasktracker.models import TaskStatus
from tasktracker.repository import FsTaskRepository, TaskNotFoundError
from tasktracker.services import TaskService


@pytest.fixture
def service(tmp_path):
    return TaskService(FsTaskRepository(tmp_path))


def _today():
    return datetime.now().astimezone()


def _by_name(service):
    return {task.name: task for task in service.list()}


@pytest.mark.parametrize("text", ["15/03/2024", "15/03/24", "15-03-2024", "15-03-24"])
def test_parse_date_formats(text):
    parsed = parse_date(text)
    assert (parsed.day, parsed.month, parsed.year) == (15, 3, 2024)


@pytest.mark.parametrize("text", ["2024-03-15", "15/3/2024", "15/03-2024", "31/02/2024", "soon"])
def test_parse_date_rejects_bad_input(text):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_date(text)


def test_build_parser_start_alias():
    args = build_parser().parse_args(["start", "Review", "-d", "15/03/2024"])
    assert args.name == "Review"
    assert args.date.day == 15


def test_new_creates_task_with_tags(service, capsys):
    assert run(service, ["new", "Write docs", "-t", "work", "-t", "docs"]) == 0
    task = _by_name(service)["Write docs"]
    assert [tag.name for tag in task.tags] == ["work", "docs"]
    assert task.status is TaskStatus.TODO
    assert "Write docs" in capsys.readouterr().out


def test_new_duplicate_fails(service, capsys):
    assert run(service, ["new", "Write docs"]) == 0
    assert run(service, ["new", "Write docs"]) == 1
    assert "already exists" in capsys.readouterr().err


def test_new_with_start_selects_task(service):
    assert run(service, ["new", "Write docs", "--start"]) == 0
    assert _by_name(service)["Write docs"].status is TaskStatus.IN_PROGRESS
    assert service.get_selected_task().name == "Write docs"


def test_switch_stops_previous(service, capsys):
    run(service, ["new", "A"])
    run(service, ["new", "B"])
    assert run(service, ["switch", "A"]) == 0
    assert run(service, ["start", "B"]) == 0
    tasks = _by_name(service)
    assert tasks["A"].status is TaskStatus.DONE
    assert tasks["B"].status is TaskStatus.IN_PROGRESS
    assert service.get_selected_task().name == "B"
    out = capsys.readouterr().out
    assert "Task started:" in out
    assert "Task stopped:" in out


def test_switch_same_task_reports_already_started(service, capsys):
    run(service, ["new", "A"])
    run(service, ["switch", "A"])
    capsys.readouterr()
    assert run(service, ["switch", "A"]) == 0
    assert 'The task "A" is already started.' in capsys.readouterr().out
    assert _by_name(service)["A"].status is TaskStatus.DONE


def test_switch_missing_task_fails(service, capsys):
    assert run(service, ["switch", "Ghost"]) == 1
    assert "Ghost" in capsys.readouterr().err


def test_switch_task_function(service):
    run(service, ["new", "A"])
    switch_task(service, "A", _today())
    assert service.get_selected_task().name == "A"
    with pytest.raises(TaskNotFoundError):
        switch_task(service, "Missing", _today())


def test_stop_marks_done(service, capsys):
    run(service, ["new", "A", "--start"])
    capsys.readouterr()
    assert run(service, ["stop", "A"]) == 0
    task = _by_name(service)["A"]
    assert task.status is TaskStatus.DONE
    assert task.finished_at is not None and task.in_progress is None
    assert "Task stopped:" in capsys.readouterr().out


def test_ls_default_shows_todo(service, capsys):
    run(service, ["new", "Alpha"])
    run(service, ["new", "Beta"])
    capsys.readouterr()
    assert run(service, ["ls"]) == 0
    out = capsys.readouterr().out
    assert "Alpha" in out and "Beta" in out


def test_ls_status_filter_excludes_others(service, capsys):
    run(service, ["new", "Alpha"])
    capsys.readouterr()
    assert run(service, ["ls", "-s", "done", "-d", "01/01/2000"]) == 0
    assert "Alpha" not in capsys.readouterr().out


def test_ls_all_shows_everything(service, capsys):
    run(service, ["new", "Alpha", "--start"])
    run(service, ["stop", "Alpha"])
    capsys.readouterr()
    assert run(service, ["ls", "-a"]) == 0
    assert "Alpha" in capsys.readouterr().out


def test_no_command_prints_help(service, capsys):
    assert run(service, []) == 0
    assert "usage" in capsys.readouterr().out


def test_unknown_command_is_usage_error(service):
    assert run(service, ["bogus"]) == 2


def test_main_creates_folder(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert main(["new", "Alpha"]) == 0
    folder = tmp_path / ".tasktracker"
    assert folder.is_dir()
    assert (folder / "tasks.json").is_file()
    assert "Alpha" in capsys.readouterr().out