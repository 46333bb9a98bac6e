import json

import pytest

from acispec.app import App
from acispec.command import EventHandler, Exec
from acispec.environment import Environment, EnvironmentVariable
from acispec.errors import SchemaError
from acispec.mounts import MountPoint, Port


VALID_APPS = [
    App(exec=["/bin/httpd"], user="0", group="0", working_directory="/tmp"),
    App(
        exec=["/app"],
        user="0",
        group="0",
        event_handlers=[EventHandler("pre-start"), EventHandler("post-stop")],
        environment=[EnvironmentVariable("DEBUG", "true")],
        working_directory="/tmp",
    ),
    App(exec=["/app", "arg1", "arg2"], user="0", group="0", working_directory="/tmp"),
]


@pytest.mark.parametrize("app", VALID_APPS)
def test_app_valid_round_trips(app):
    app.validate()
    assert App.from_json(app.to_json()) == app


EXEC_INVALID = [
    {"exec": None},
    {"exec": [], "user": "0", "group": "0"},
    {"exec": ["app"], "user": "0", "group": "0"},
    {"exec": ["bin/app", "arg1"], "user": "0", "group": "0"},
]


@pytest.mark.parametrize("fields", EXEC_INVALID)
def test_app_exec_invalid(fields):
    app = App(**fields)
    with pytest.raises(SchemaError, match="Exec"):
        app.validate()


EVENT_HANDLERS_INVALID = [
    ["pre-start", "pre-start"],
    ["post-stop", "pre-start", "post-stop"],
]


@pytest.mark.parametrize("handler_names", EVENT_HANDLERS_INVALID)
def test_app_event_handlers_invalid(handler_names):
    app = App(
        exec=["/bin/httpd"],
        user="0",
        group="0",
        event_handlers=[EventHandler(name) for name in handler_names],
    )
    with pytest.raises(SchemaError, match="Only one eventHandler"):
        app.validate()


@pytest.mark.parametrize(
    "app",
    [
        App(exec=["/app"]),
        App(exec=["/app"], user="0"),
        App(exec=["app"], group="0"),
    ],
)
def test_user_group_invalid(app):
    with pytest.raises(SchemaError):
        app.validate()


@pytest.mark.parametrize("directory", ["stuff", "../home/fred"])
def test_app_working_directory_invalid(directory):
    app = App(exec=["/app"], user="foo", group="bar", working_directory=directory)
    with pytest.raises(SchemaError, match="absolute path"):
        app.validate()


def test_app_environment_invalid():
    app = App(
        exec=["/app"],
        user="foo",
        group="bar",
        environment=Environment([EnvironmentVariable("0DEBUG", "true")]),
    )
    with pytest.raises(SchemaError, match="valid identifier"):
        app.validate()


@pytest.mark.parametrize(
    "text", ["garbage", '{"Exec":"not a list"}', '{"Exec":["notfullyqualified"]}']
)
def test_app_unmarshal_bad(text):
    with pytest.raises(ValueError):
        App.from_json(text)


def test_app_unmarshal_good():
    app = App.from_json('{"Exec":["/a"],"User":"0","Group":"0"}')
    assert app == App(exec=Exec(["/a"]), user="0", group="0", environment=Environment())
    assert app.environment == []


def test_empty_fields_omitted():
    app = App(exec=["/a"], user="0", group="0")
    assert app.to_data() == {"exec": ["/a"], "user": "0", "group": "0"}


def test_full_round_trip_keeps_nested_values():
    data = {
        "exec": ["/bin/server", "--port", "80"],
        "eventHandlers": [{"name": "pre-start", "exec": ["/bin/setup"]}],
        "user": "0",
        "group": "0",
        "workingDirectory": "/srv",
        "environment": [{"name": "MODE", "value": "prod"}],
        "mountPoints": [{"name": "data", "path": "/data", "readOnly": True}],
        "ports": [{"name": "http", "protocol": "tcp", "port": 80, "socketActivated": False}],
        "isolators": [{"name": "resource/cpu", "value": {"limit": "1"}}],
    }
    app = App.from_data(data)
    assert app.mount_points == [MountPoint("data", "/data", True)]
    assert app.ports == [Port("http", "tcp", 80, False)]
    assert app.isolators.get_by_name("resource/cpu").value_raw == {"limit": "1"}
    assert json.loads(app.to_json()) == data


def test_to_json_refuses_invalid_app():
    with pytest.raises(SchemaError, match="User is required"):
        App(exec=["/a"], group="0").to_json()