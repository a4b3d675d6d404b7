"""
Tests for the power propagation engine
"""

import random

import pytest
from loguru import logger

from powernet import Consumer, Generator, GridRelay, NetworkConfig, build_random_network
from propagation import recompute_power


def powered_ids(*collections):
    return {e.id for collection in collections for e in collection if e.powered}


# ========================= Reference scenarios =========================

def test_scenario_a_chain_through_active_relay():
    generator = Generator(id="G", x=0, y=0, range=100)
    relay = GridRelay(id="R", x=90, y=0, range=100)
    consumer = Consumer(id="C", x=170, y=0)

    recompute_power([generator], [relay], [consumer])

    assert generator.powered
    assert relay.powered
    assert consumer.powered


def test_scenario_b_inactive_relay_breaks_chain():
    generator = Generator(id="G", x=0, y=0, range=100)
    relay = GridRelay(id="R", x=90, y=0, range=100, active=False)
    consumer = Consumer(id="C", x=170, y=0)

    recompute_power([generator], [relay], [consumer])

    assert generator.powered
    assert not relay.powered
    assert not consumer.powered


def test_scenario_c_consumer_out_of_range():
    generator = Generator(id="G", x=0, y=0, range=50)
    consumer = Consumer(id="C", x=60, y=0)

    recompute_power([generator], [], [consumer])

    assert generator.powered
    assert not consumer.powered


def test_scenario_d_no_active_source():
    generator = Generator(id="G", x=0, y=0, range=100, active=False)
    relay = GridRelay(id="R", x=50, y=0, range=100)
    consumer = Consumer(id="C", x=100, y=0)

    result = recompute_power([generator], [relay], [consumer])

    assert not generator.powered
    assert not relay.powered
    assert not consumer.powered
    assert result.powered_ids == []
    assert result.iterations == 0


# ========================= Edge cases =========================

def test_zero_generators_leaves_everything_unpowered():
    relay = GridRelay(id="R", x=0, y=0)
    consumer = Consumer(id="C", x=0, y=0)
    relay.powered = consumer.powered = True

    recompute_power([], [relay], [consumer])

    assert not relay.powered
    assert not consumer.powered


def test_consumers_do_not_forward_power():
    generator = Generator(id="G", x=0, y=0, range=100)
    consumer = Consumer(id="C", x=90, y=0)
    relay = GridRelay(id="R", x=170, y=0, range=100)

    recompute_power([generator], [relay], [consumer])

    assert consumer.powered
    assert not relay.powered


def test_generators_are_not_energized_by_other_generators():
    online = Generator(id="G1", x=0, y=0, range=100)
    offline = Generator(id="G2", x=10, y=0, range=100, active=False)

    recompute_power([online, offline], [], [])

    assert online.powered
    assert not offline.powered


def test_power_flows_from_generator_range_not_target_range():
    generator = Generator(id="G", x=0, y=0, range=10)
    relay = GridRelay(id="R", x=50, y=0, range=100)

    recompute_power([generator], [relay], [])

    assert not relay.powered


def test_long_relay_chain():
    generator = Generator(id="G", x=0, y=0, range=100)
    relays = [GridRelay(id=f"R{i}", x=90 * i, y=0, range=100) for i in range(1, 11)]
    consumer = Consumer(id="C", x=90 * 10 + 80, y=0)

    result = recompute_power([generator], relays, [consumer])

    assert all(r.powered for r in relays)
    assert consumer.powered
    assert result.relays_powered == 10
    assert result.all_consumers_powered


def test_cut_relay_unpowers_downstream_only():
    generator = Generator(id="G", x=0, y=0, range=100)
    near = Consumer(id="C_near", x=50, y=0)
    cut = GridRelay(id="R_cut", x=90, y=0, range=100)
    downstream = GridRelay(id="R_down", x=180, y=0, range=100)
    far = Consumer(id="C_far", x=260, y=0)

    relays = [cut, downstream]
    consumers = [near, far]
    recompute_power([generator], relays, consumers)
    assert powered_ids(relays, consumers) == {"R_cut", "R_down", "C_near", "C_far"}

    cut.active = False
    recompute_power([generator], relays, consumers)
    assert powered_ids(relays, consumers) == {"C_near"}


def test_union_of_multiple_generators():
    west = Generator(id="G_w", x=0, y=0, range=100)
    east = Generator(id="G_e", x=1000, y=0, range=100)
    shared = GridRelay(id="R", x=500, y=0, range=450)
    consumers = [Consumer(id="C_w", x=60, y=0), Consumer(id="C_e", x=940, y=0),
                 Consumer(id="C_mid", x=500, y=300)]

    result = recompute_power([west, east], [shared], consumers)

    assert result.generators_online == 2
    assert powered_ids(consumers) == {"C_w", "C_e"}
    assert not shared.powered


# ========================= Properties =========================

@pytest.fixture
def random_network():
    network = build_random_network(3, 25, 40, width=800, height=600, seed=11,
                                   config=NetworkConfig(default_range=120.0))
    logger.info(f"Random network summary: {network.get_summary()}")
    return network


def test_recompute_is_idempotent(random_network):
    first = random_network.recompute()
    flags = [e.powered for e in random_network]
    second = random_network.recompute()

    assert [e.powered for e in random_network] == flags
    assert first.powered_ids == second.powered_ids


def test_result_is_independent_of_collection_order(random_network):
    generators = list(random_network.generators.values())
    relays = list(random_network.relays.values())
    consumers = list(random_network.consumers.values())
    for relay in relays[::3]:
        relay.active = False

    recompute_power(generators, relays, consumers)
    expected = powered_ids(generators, relays, consumers)

    rng = random.Random(5)
    for _ in range(5):
        rng.shuffle(generators)
        rng.shuffle(relays)
        rng.shuffle(consumers)
        recompute_power(generators, relays, consumers)
        assert powered_ids(generators, relays, consumers) == expected


def test_activation_is_monotone(random_network):
    relays = list(random_network.relays.values())
    for relay in relays[::2]:
        random_network.set_active(relay, False)

    before = powered_ids(random_network)
    for relay in relays[::2]:
        random_network.set_active(relay, True)
        assert before <= powered_ids(random_network)
        random_network.set_active(relay, False)
        assert powered_ids(random_network) == before

    generator = next(iter(random_network.generators.values()))
    random_network.set_active(generator, False)
    reduced = powered_ids(random_network)
    random_network.set_active(generator, True)
    assert reduced <= powered_ids(random_network)


def test_invariants_hold_after_recompute(random_network):
    from powernet.geometry import in_range

    for relay in list(random_network.relays.values())[::4]:
        random_network.set_active(relay, False)

    sources = [*random_network.generators.values(), *random_network.relays.values()]
    for generator in random_network.generators.values():
        assert generator.powered == generator.active
    for relay in random_network.relays.values():
        if not relay.active:
            assert not relay.powered
    for consumer in random_network.consumers.values():
        fed = any(s.powered and s.active and in_range(s, consumer) for s in sources)
        assert consumer.powered == fed
