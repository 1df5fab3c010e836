from xinukit.rand import RAND_MAX, Rand


def test_first_value_from_seed_one():
    assert Rand(1).rand() == 16838


def test_default_seed_is_one():
    default, seeded = Rand(), Rand(1)
    assert [default.rand() for _ in range(20)] == [seeded.rand() for _ in range(20)]


def test_srand_restarts_sequence():
    gen = Rand(42)
    first = [gen.rand() for _ in range(10)]
    gen.srand(42)
    assert [gen.rand() for _ in range(10)] == first


def test_values_stay_in_range():
    gen = Rand(12345)
    values = [gen.rand() for _ in range(1000)]
    assert all(0 <= v <= RAND_MAX for v in values)
    assert len(set(values)) > 900


def test_instances_are_independent():
    a, b = Rand(7), Rand(7)
    a.rand()
    a.rand()
    c = Rand(7)
    assert b.rand() == c.rand()


def test_seed_is_reduced_to_32_bits():
    a, b = Rand(5), Rand(5 + (1 << 32))
    assert [a.rand() for _ in range(5)] == [b.rand() for _ in range(5)]