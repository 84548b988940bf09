from functools import reduce

from pdkscan.aggregate import aggregate_models, merge_models, union_casefold
from pdkscan.model import DeviceClass, SpectreModel


def _partial(name, **kw):
	return SpectreModel(name=name, **kw)


def test_union_casefold_keeps_first_spelling():
	assert union_casefold(["TT", "ff"], ["tt", "", "SS"]) == ["TT", "ff", "SS"]


def test_two_decks_two_corners_merge_into_one_record():
	a = _partial("m1", model_type="pmos", device_class=DeviceClass.PMOS, corners=["tt"], decks=["/d/a.scs"], source_files=["/d/a.scs"])
	b = _partial("M1", model_type="pmos", device_class=DeviceClass.PMOS, corners=["ff"], decks=["/d/b.scs"], source_files=["/d/b.scs"])

	(m,) = aggregate_models([a, b])

	assert m.name == "m1"
	assert m.corners == ["ff", "tt"]
	assert m.decks == ["/d/a.scs", "/d/b.scs"]


def test_scalars_take_first_non_empty_value():
	a = _partial("x", device_class=DeviceClass.UNKNOWN)
	b = _partial("x", model_type="bsim4", device_class=DeviceClass.OTHER, voltage_domain="1.8V")
	c = _partial("x", model_type="nmos", device_class=DeviceClass.NMOS, voltage_domain="3.3V", threshold_flavor="LVT")

	(m,) = aggregate_models([a, b, c])

	assert m.model_type == "bsim4"
	assert m.device_class is DeviceClass.OTHER
	assert m.voltage_domain == "1.8V"
	assert m.threshold_flavor == "LVT"


def test_merge_is_associative():
	parts = [
		_partial("n", corners=["tt"], sections=["A"]),
		_partial("n", model_type="nmos", device_class=DeviceClass.NMOS, corners=["ff"], sections=["a"]),
		_partial("n", corners=["ss", "TT"], cornerDetails=["hot"]),
	]
	left = merge_models(merge_models(parts[0], parts[1]), parts[2])
	right = merge_models(parts[0], merge_models(parts[1], parts[2]))
	assert left == right == reduce(merge_models, parts)


def test_result_sorted_case_insensitively():
	names = [m.name for m in aggregate_models([_partial("beta"), _partial("Alpha"), _partial("gamma"), _partial("ALPHA")])]
	assert names == ["Alpha", "beta", "gamma"]
