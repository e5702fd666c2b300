from streamlit.testing.v1 import AppTest


def test_app_prices_default_scenario():
    at = AppTest.from_file("../app.py")
    at.run()
    assert not at.exception
    result = at.session_state["result"]
    assert result.ok
    assert result.par_rate is not None


def test_app_shows_validation_error():
    at = AppTest.from_file("../app.py")
    at.run()
    fthb = next(w for w in at.sidebar.checkbox if w.label == "First Time Home Buyer")
    occupancy = next(w for w in at.sidebar.selectbox if w.label == "Occupancy")
    fthb.check()
    occupancy.select("Second Home")
    at.run()
    assert not at.exception
    assert at.error[0].value == "FTHB cannot select Second Home."
