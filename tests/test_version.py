from siegekit.version import PROGRAM_NAME, VERSION, banner


def test_banner_holds_name_and_version():
    assert banner().split() == ["siege", "4.0.4rc3"]


def test_banner_starts_with_program_name():
    assert banner().startswith(PROGRAM_NAME + " ")
    assert banner().endswith(VERSION)