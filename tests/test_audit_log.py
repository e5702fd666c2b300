from quickprice.audit import ChangeLog


def test_change_log_records_rule_field_and_values():
    log = ChangeLog()
    log.record("DSCR_INVESTMENT", "occupancy", "Primary", "Investment")
    assert len(log.entries) == 1
    entry = log.entries[0]
    assert entry.rule == "DSCR_INVESTMENT"
    assert entry.field == "occupancy"
    assert entry.old_value == "Primary"
    assert entry.new_value == "Investment"
