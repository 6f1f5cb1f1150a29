import pytest
from returns.io import IOFailure
from returns.result import Failure
from returns.unsafe import unsafe_perform_io

from ketch.domain.notation import Identifier, KeyedList, List, parse
from ketch.domain.project import (
    DEFAULT_FLAGS,
    BuildScriptTiming,
    Project,
    ProjectType,
    Standard,
    Std,
    load_project,
    project_from_config,
)
from ketch.errors import ConfigReadError, NotationSyntaxError, ProjectValidationError

MINIMAL = "(name hello)\n(version 0.1.0)\n"


def from_text(text: str):
    return parse(text).bind(project_from_config)


def validation_error(text: str) -> ProjectValidationError:
    result = from_text(text)
    assert isinstance(result, Failure)
    error = result.failure()
    assert isinstance(error, ProjectValidationError)
    return error


def test_defaults():
    project = from_text(MINIMAL).unwrap()
    assert project == Project(name="hello", version="0.1.0")
    assert project.compiler == "cc"
    assert project.flags == DEFAULT_FLAGS
    assert project.standard == Standard(Std.C99, gnu_extensions=False)
    assert project.project_type is ProjectType.BINARY
    assert project.build_script_timing is BuildScriptTiming.NONE


def test_every_key():
    project = from_text(
        MINIMAL
        + "(standard gnu11)(cc clang)(flags -O2 -g -O2)(type shared)(buildscript repeat)"
    ).unwrap()
    assert project.standard == Standard(Std.C11, gnu_extensions=True)
    assert project.compiler == "clang"
    assert project.flags == ("-O2", "-g", "-O2")
    assert project.project_type is ProjectType.SHARED
    assert project.build_script_timing is BuildScriptTiming.REPEAT


def test_missing_name():
    error = validation_error("(version 0.1.0)")
    assert error.key == "name"
    assert "`name`" in str(error)


def test_missing_version():
    assert validation_error("(name hello)").key == "version"


@pytest.mark.parametrize(
    "text",
    ["(name a b)", "(name)", "(name (x y))"],
)
def test_name_must_be_single_identifier(text):
    assert validation_error(text + "(version 1)").key == "name"


def test_name_from_non_keyed_forms_is_missing():
    forms = (Identifier("name"), List((Identifier("x"),)), KeyedList("version", List((Identifier("1"),))))
    result = project_from_config(forms)
    assert result.failure().key == "name"


def test_duplicate_keys_first_wins():
    project = from_text(MINIMAL + "(name other)(cc gcc)(cc clang)").unwrap()
    assert project.name == "hello"
    assert project.compiler == "gcc"


@pytest.mark.parametrize(
    "token, rendered",
    [
        ("ansi", "c89"),
        ("c89", "c89"),
        ("gnu99", "gnu99"),
        ("c11", "c11"),
        ("c17", "c17"),
        ("c23", "c2x"),
        ("gnu23", "gnu2x"),
    ],
)
def test_standard_rendering(token, rendered):
    project = from_text(MINIMAL + f"(standard {token})").unwrap()
    assert str(project.standard) == rendered
    assert project.standard.flag == f"-std={rendered}"


def test_ansi_is_c89_without_extensions():
    project = from_text(MINIMAL + "(standard ansi)").unwrap()
    assert project.standard == Standard(Std.C89, gnu_extensions=False)


@pytest.mark.parametrize("token", ["c2x", "c98", "gnu", "C99", "ansi89"])
def test_invalid_standard_lists_valid_ones(token):
    error = validation_error(MINIMAL + f"(standard {token})")
    assert error.key == "standard"
    assert f"`{token}`" in str(error)
    assert (
        "ansi, c89, gnu89, c99, gnu99, c11, gnu11, c17, gnu17, c23, gnu23" in str(error)
    )


def test_standard_must_be_single():
    assert validation_error(MINIMAL + "(standard c99 c11)").key == "standard"


def test_cc_must_be_single():
    assert validation_error(MINIMAL + "(cc gcc clang)").key == "cc"


def test_flags_replace_defaults():
    project = from_text(MINIMAL + "(flags -Werror)").unwrap()
    assert project.flags == ("-Werror",)


def test_empty_flags():
    assert from_text(MINIMAL + "(flags)").unwrap().flags == ()


def test_flags_reject_nested_lists():
    error = validation_error(MINIMAL + "(flags -Wall (nested x))")
    assert error.key == "flags"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("binary", ProjectType.BINARY),
        ("shared", ProjectType.SHARED),
        ("static", ProjectType.STATIC),
    ],
)
def test_project_type(token, expected):
    assert from_text(MINIMAL + f"(type {token})").unwrap().project_type is expected


def test_invalid_project_type():
    error = validation_error(MINIMAL + "(type dll)")
    assert error.key == "type"
    assert "binary, shared, static" in str(error)


def test_invalid_build_script_timing():
    error = validation_error(MINIMAL + "(buildscript sometimes)")
    assert error.key == "buildscript"
    assert "before, repeat, after" in str(error)


def test_render():
    project = from_text(MINIMAL + "(cc gcc)(flags -Wall -g)(type static)(standard gnu23)").unwrap()
    assert str(project) == (
        "CC       gcc\n"
        "CFLAGS   -Wall -g -std=gnu2x\n"
        "TYPE     STATIC\n"
        "NAME     hello\n"
        "VERSION  0.1.0"
    )


def test_render_without_flags():
    project = from_text(MINIMAL + "(flags)").unwrap()
    assert "CFLAGS   -std=c99\n" in str(project)
    assert "TYPE     BIN" in str(project)


def test_project_is_immutable():
    project = from_text(MINIMAL).unwrap()
    with pytest.raises(AttributeError):
        project.name = "other"  # type: ignore


def test_load_project(tmp_path):
    (tmp_path / "ketchfile").write_text(MINIMAL + "(type shared)")
    project = unsafe_perform_io(load_project(tmp_path).unwrap())
    assert project.project_type is ProjectType.SHARED


def test_load_project_rereads_file(tmp_path):
    config = tmp_path / "ketchfile"
    config.write_text(MINIMAL)
    first = unsafe_perform_io(load_project(tmp_path).unwrap())
    config.write_text("(name other)\n(version 2)\n")
    second = unsafe_perform_io(load_project(tmp_path).unwrap())
    assert (first.name, second.name) == ("hello", "other")


@pytest.mark.parametrize(
    "content, error_type",
    [
        (None, ConfigReadError),
        ("(name hello", NotationSyntaxError),
        ("(version 1)", ProjectValidationError),
    ],
)
def test_load_project_failures(tmp_path, content, error_type):
    if content is not None:
        (tmp_path / "ketchfile").write_text(content)
    result = load_project(tmp_path)
    assert isinstance(result, IOFailure)
    assert isinstance(unsafe_perform_io(result.failure()), error_type)
