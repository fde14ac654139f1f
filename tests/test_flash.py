import pytest

from partup.errors import ErrorCode, PartupError
from partup.flash import Flash


class _RecordingFlash(Flash):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        object.__setattr__(self, "stages", [])

    def init_device(self):
        self.stages.append("init")

    def setup_layout(self):
        self.stages.append("layout")

    def write_data(self):
        self.stages.append("data")


def test_defaults():
    flash = Flash()
    assert flash.device_path is None
    assert flash.config is None
    assert flash.prefix is None
    assert flash.skip_checksums is False


def test_properties_are_kept():
    config = {"disklabel": "msdos"}
    flash = Flash("/dev/mmcblk0", config, "data", True)
    assert flash.device_path == "/dev/mmcblk0"
    assert flash.config is config
    assert flash.prefix == "data"
    assert flash.skip_checksums is True


def test_properties_are_construct_only():
    flash = Flash("/dev/mmcblk0")
    with pytest.raises(AttributeError):
        flash.device_path = "/dev/sda"
    assert flash.device_path == "/dev/mmcblk0"


@pytest.mark.parametrize(
    "stage, code",
    [
        ("init_device", ErrorCode.FLASH_INIT),
        ("setup_layout", ErrorCode.FLASH_LAYOUT),
        ("write_data", ErrorCode.FLASH_DATA),
    ],
)
def test_base_stage_is_missing(stage, code):
    flash = Flash("/dev/mmcblk0")
    with pytest.raises(PartupError) as info:
        getattr(flash, stage)()
    assert info.value.code == code
    assert "Flash" in str(info.value)
    assert stage in str(info.value)


def test_subclass_name_in_message():
    class Partial(Flash):
        pass

    with pytest.raises(PartupError) as info:
        Flash.write_data(Partial())
    assert "'Partial'" in str(info.value)
    assert info.value.code == ErrorCode.FLASH_DATA


def test_subclass_stages_run_in_order():
    flash = _RecordingFlash("/dev/mmcblk0", None, "data", False)
    flash.init_device()
    flash.setup_layout()
    flash.write_data()
    assert flash.stages == ["init", "layout", "data"]
    assert flash.prefix == "data"

    with pytest.raises(PartupError) as info:
        Flash.write_data(flash)
    assert "'_RecordingFlash'" in str(info.value)
    assert flash.stages == ["init", "layout", "data"]