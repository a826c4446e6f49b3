"""Tests for listing wpa_supplicant networks."""

from unittest.mock import patch

from wpactl.lister import NetworkLister, strip_quotes


class TestStripQuotes:

    def test_strips_one_pair(self):
        assert strip_quotes('"home"') == "home"

    def test_unquoted_value(self):
        assert strip_quotes("WPA-PSK") == "WPA-PSK"

    def test_only_single_quote_each_side(self):
        assert strip_quotes('""x""') == '"x"'


class TestNetworkLister:

    def test_empty(self, cli):
        assert NetworkLister(cli).list_networks() == []

    def test_lists_and_enriches(self, supplicant, cli):
        supplicant.add("Home", id_str="home", priority=5, flags="[CURRENT]")
        supplicant.add("Cafe")

        networks = NetworkLister(cli).list_networks()

        assert [n.id for n in networks] == [0, 1]
        home, cafe = networks
        assert home.ssid == "Home"
        assert home.bssid == "any"
        assert home.flags == "[CURRENT]"
        assert home.id_str == "home"
        assert home.priority == 5
        assert home.key_mgmt == "WPA-PSK"
        assert cafe.id_str is None
        assert cafe.priority is None

    def test_three_field_queries_per_network(self, supplicant, cli):
        supplicant.add("Home")
        supplicant.add("Cafe")
        NetworkLister(cli).list_networks()
        queried = [argv[1:] for argv in supplicant.commands_named("get_network")]
        assert queried == [
            ["0", "id_str"], ["0", "priority"], ["0", "key_mgmt"],
            ["1", "id_str"], ["1", "priority"], ["1", "key_mgmt"],
        ]

    def test_sorted_by_id(self, cli):
        lines = ["network id / ssid / bssid / flags", "3\tB\tany\t", "1\tA\tany\t[DISABLED]"]
        with patch.object(cli, "query", side_effect=lambda command, *args: lines if command == "list_networks" else ["FAIL"]):
            networks = NetworkLister(cli).list_networks()
        assert [(n.id, n.ssid) for n in networks] == [(1, "A"), (3, "B")]

    def test_skips_unparsable_lines(self, cli):
        lines = ["network id / ssid / bssid / flags", "garbage", "0\tA\tany\t"]
        with patch.object(cli, "query", side_effect=lambda command, *args: lines if command == "list_networks" else ["FAIL"]):
            networks = NetworkLister(cli).list_networks()
        assert [n.id for n in networks] == [0]

    def test_get_status(self, supplicant, cli):
        status = NetworkLister(cli).get_status()
        assert status["wpa_state"] == "COMPLETED"
        assert status["ssid"] == "Existing"
