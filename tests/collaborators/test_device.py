from mixpanel_analytics.collaborators.device import DEFAULT_PLATFORM_TAG, DeviceInfo


def test_constants_keys(device):
    assert device.constants() == {
        "app_build_number": "42",
        "app_id": "demo-app",
        "app_name": "Demo App",
        "app_version_string": "1.2.3",
        "device_name": "Pixel 7",
        "expo_app_ownership": None,
        "os_version": "14",
    }


def test_empty_ownership_is_unset():
    assert DeviceInfo(app_ownership="").constants()["expo_app_ownership"] is None
    assert DeviceInfo(app_ownership="expo").constants()["expo_app_ownership"] == "expo"


def test_window_size_and_user_agent(device):
    assert device.get_window_size() == (412, 915)
    assert device.get_user_agent() == "Mozilla/5.0 (Linux; Android 14)"


def test_is_ios(device, ios_device):
    assert ios_device.is_ios() is True
    assert device.is_ios() is False
    assert DeviceInfo(os_name="iOS").is_ios() is True


def test_default_platform_tag():
    assert DeviceInfo().platform_tag == DEFAULT_PLATFORM_TAG == "android"


def test_from_host(mocker):
    mocker.patch("mixpanel_analytics.collaborators.device.platform.system", return_value="Linux")
    mocker.patch("mixpanel_analytics.collaborators.device.platform.release", return_value="6.1.0")
    mocker.patch("mixpanel_analytics.collaborators.device.platform.machine", return_value="x86_64")
    mocker.patch("mixpanel_analytics.collaborators.device.socket.gethostname", return_value="build-box")

    info = DeviceInfo.from_host(app_name="Worker")

    assert info.os_name == "linux"
    assert info.os_version == "6.1.0"
    assert info.model_id == "x86_64"
    assert info.device_name == "build-box"
    assert info.platform_tag == "linux"
    assert info.app_name == "Worker"
    assert info.user_agent.startswith("python-requests/")
