from fetchkit.temps import TempValue, detect_temps


def _device(base, name, files):
    directory = base / name
    directory.mkdir()
    for relative, content in files.items():
        path = directory / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return directory


def test_reads_sensor(tmp_path):
    _device(tmp_path, "hwmon0", {"temp1_input": "45000\n", "name": "k10temp\n"})
    assert detect_temps(str(tmp_path)) == [TempValue(name="k10temp", device_class="", value="45000")]


def test_device_class_is_enough(tmp_path):
    _device(tmp_path, "hwmon1", {"temp2_input": "38000\n", "device/class": "0x030000\n"})
    sensors = detect_temps(str(tmp_path))
    assert [sensor.device_class for sensor in sensors] == ["0x030000"]
    assert sensors[0].value == "38000"


def test_sensor_without_name_or_class_is_dropped(tmp_path):
    _device(tmp_path, "hwmon0", {"temp1_input": "45000\n"})
    assert detect_temps(str(tmp_path)) == []


def test_device_without_temperature_is_dropped(tmp_path):
    _device(tmp_path, "hwmon0", {"fan1_input": "1200\n", "name": "fan\n"})
    assert detect_temps(str(tmp_path)) == []


def test_two_digit_index_does_not_match(tmp_path):
    _device(tmp_path, "hwmon0", {"temp10_input": "45000\n", "name": "chip\n"})
    assert detect_temps(str(tmp_path)) == []


def test_hidden_entries_skipped(tmp_path):
    _device(tmp_path, ".hidden", {"temp1_input": "1\n", "name": "x\n"})
    _device(tmp_path, "hwmon0", {"temp1_input": "2\n", "name": "y\n"})
    assert [sensor.name for sensor in detect_temps(str(tmp_path))] == ["y"]


def test_missing_base_dir(tmp_path):
    assert detect_temps(str(tmp_path / "missing")) == []