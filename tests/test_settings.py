import pytest

from settings import RaceSettings, load_settings


def test_defaults():
    assert load_settings({}) == RaceSettings()
    assert load_settings({}).request_timeout is None


def test_from_environment():
    s = load_settings({
        "RACE_PROVIDER_URL": "http://solver:9000",
        "RACE_REQUEST_TIMEOUT": "2.5",
        "RACE_HOST": "0.0.0.0",
        "RACE_PORT": "8080",
        "RACE_DEBUG": "yes",
        "RACE_LOG_LEVEL": "debug",
    })
    assert s.provider_url == "http://solver:9000"
    assert s.request_timeout == 2.5
    assert (s.host, s.port, s.debug, s.log_level) == ("0.0.0.0", 8080, True, "DEBUG")


@pytest.mark.parametrize("env,name", [
    ({"RACE_PORT": "http"}, "RACE_PORT"),
    ({"RACE_PORT": "-1"}, "RACE_PORT"),
    ({"RACE_REQUEST_TIMEOUT": "soon"}, "RACE_REQUEST_TIMEOUT"),
    ({"RACE_LOG_LEVEL": "LOUD"}, "RACE_LOG_LEVEL"),
])
def test_bad_values_name_the_variable(env, name):
    with pytest.raises(ValueError, match=name):
        load_settings(env)
