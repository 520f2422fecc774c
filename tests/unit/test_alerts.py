# =============================================================================
# tests/unit/test_alerts.py
# Unit Tests for the alert feed
# =============================================================================

from btc_core.analytics.alerts import AlertEntry, build_alert_feed
from btc_core.analytics.stock import stock_rows


def _critical(center, request_id=None, date="2024-01-15T10:00:00Z"):
    request = {"priority": 3, "bloodGroup": 8, "requestDate": date}
    if center is not None:
        request["bloodTansfusionCenter"] = {"name": center}
    if request_id is not None:
        request["id"] = request_id
    return request


class TestStockAlerts:

    def test_critical_and_low_stock(self, raw_snapshot):
        rows = stock_rows(raw_snapshot["stats"]["globalBloodStock"])
        alerts = build_alert_feed(rows, [])

        assert alerts == [
            AlertEntry("stock-O+", "Stock Critical", "O+ blood type below minimum threshold", "high", "Real-time"),
            AlertEntry("low-A+", "Stock Low", "A+ blood type running low", "medium", "Real-time"),
        ]

    def test_critical_alerts_come_before_low_ones(self):
        # The low entry comes first in the map
        rows = stock_rows({
            "3": {"totalAvailable": 80, "totalMinStock": 100},
            "7": {"totalAvailable": 40, "totalMinStock": 100},
            "6": {"totalAvailable": 90, "totalMinStock": 100},
            "8": {"totalAvailable": 10, "totalMinStock": 100},
        })
        alerts = build_alert_feed(rows, [_critical("X", "1")])

        assert [a.id for a in alerts] == ["stock-O+", "stock-O-", "low-A+", "low-B-", "req-1"]

    def test_duplicate_codes_give_one_alert(self):
        rows = stock_rows({
            "7": {"totalAvailable": 10, "totalMinStock": 50},
            "7.0": {"totalAvailable": 10, "totalMinStock": 50},
        })
        ids = [a.id for a in build_alert_feed(rows, [])]

        assert ids == ["stock-O+"]
        assert len(ids) == len(set(ids))


class TestRequestAlerts:

    def test_capped_at_three(self):
        requests = [_critical("X", "1"), _critical("Y", "2"), _critical("Z", "3"), _critical("W", "4")]
        alerts = build_alert_feed([], requests)

        assert [a.category for a in alerts] == ["Critical Request"] * 3
        assert [a.message for a in alerts] == [
            "Critical O- request from X",
            "Critical O- request from Y",
            "Critical O- request from Z",
        ]

    def test_only_critical_priority(self, raw_snapshot):
        alerts = build_alert_feed([], raw_snapshot["requests"])
        assert [a.id for a in alerts] == ["req-r1", "req-r3"]

    def test_unknown_center_and_dates(self):
        alerts = build_alert_feed([], [_critical(None, "9", date=None), _critical("X", "10")])

        assert alerts[0].message == "Critical O- request from Unknown Center"
        assert alerts[0].timestamp == "Unknown date"
        assert alerts[1].timestamp == "2024-01-15"
        assert {a.severity for a in alerts} == {"high"}

    def test_position_ids_when_request_has_no_id(self):
        requests = [{"priority": 1}, _critical("X")]
        assert build_alert_feed([], requests)[0].id == "req-#2"

    def test_custom_cap(self):
        requests = [_critical("X", "1"), _critical("Y", "2")]
        assert build_alert_feed([], requests, max_critical_requests=0) == []


class TestAlertFeed:

    def test_same_input_same_feed(self, raw_snapshot):
        rows = stock_rows(raw_snapshot["stats"]["globalBloodStock"])
        first = build_alert_feed(rows, raw_snapshot["requests"])
        second = build_alert_feed(stock_rows(raw_snapshot["stats"]["globalBloodStock"]), raw_snapshot["requests"])

        assert first == second
        assert [a.id for a in first] == ["stock-O+", "low-A+", "req-r1", "req-r3"]

    def test_empty(self):
        assert build_alert_feed([], None) == []
