import pytest
from numpy.random import default_rng

from rank_tree.experiment import build_tree, insert_delete_costs, run, split_costs


def test_build_tree():
    tree = build_tree(range(10))
    assert tree.size() == 10
    assert tree.keys_to_array() == list(range(10))
    assert tree.values_to_array() == [str(k) for k in range(10)]


def test_insert_delete_costs():
    ins, dels = insert_delete_costs(300, default_rng(0))

    # amortized rebalancing cost is constant
    assert 0 < ins < 5
    assert 0 <= dels < 5


def test_split_costs():
    ret = split_costs(300, default_rng(1))

    assert set(ret.keys()) == {"random", "left max"}
    for mean, worst in ret.values():
        assert 0 <= mean <= worst


def test_run(capsys):
    run(sizes=(64, 128), seed=2, repeat=2)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].split()[0] == "n"
    assert lines[1].split()[0] == "64"
    assert lines[2].split()[0] == "128"


def test_run_is_reproducible(capsys):
    run(sizes=(50,), seed=3, repeat=1)
    first = capsys.readouterr().out

    run(sizes=(50,), seed=3, repeat=1)
    assert capsys.readouterr().out == first


def test_run_rejects_zero_repeat():
    with pytest.raises(AssertionError):
        run(sizes=(10,), seed=0, repeat=0)
