from nameplate import util
from nameplate.cache import ResultCache

def test_fullname():
    assert util.fullname(ResultCache) == "nameplate.cache.ResultCache"
    assert util.fullname(ResultCache()) == "nameplate.cache.ResultCache"
    assert util.fullname(3) == "int"

def test_tab_complete():
    options = ["gamma", "alpha", "alps", "beta"]
    assert util.tab_complete("al", "", options) == "alpha"
    assert util.tab_complete("al", "alpha", options) == "alps"
    assert util.tab_complete("al", "alps", options) == "al"
    assert util.tab_complete("x", "", options) == "x"
    assert util.tab_complete("z", "", options) == "z"
