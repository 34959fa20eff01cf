from octstream.outputwindow import OutputWindow


def test_default_settings_empty():
    assert OutputWindow().settings() == {}


def test_name_round_trip():
    win = OutputWindow("bscan")
    assert win.name == "bscan"
    win.name = "enface"
    assert win.name == "enface"


def test_settings_round_trip():
    win = OutputWindow()
    win.apply_settings({"zoom": 2, "grid": True})
    assert win.settings() == {"zoom": 2, "grid": True}


def test_settings_are_copies():
    source = {"zoom": 1}
    win = OutputWindow()
    win.apply_settings(source)
    source["zoom"] = 5
    assert win.settings()["zoom"] == 1
    out = win.settings()
    out["zoom"] = 9
    assert win.settings()["zoom"] == 1