import pandas as pd
import pytest

from data_loader import (
    DataLoaderError, EmptyResultError, drop_missing_target, load_data, select_region,
)


def test_load_valid_csv(hpi_csv):
    df = load_data(str(hpi_csv))
    assert len(df) == 2 * 96
    assert pd.api.types.is_datetime64_any_dtype(df["Date"])
    assert str(df["SalesVolume"].dtype) == "Int64"
    # other columns are kept untouched
    assert "AveragePrice" in df.columns


def test_dates_are_day_first(tmp_path):
    p = tmp_path / "hpi.csv"
    pd.DataFrame({
        "Date": ["01/02/2020", "13/03/2020"],
        "RegionName": ["United Kingdom"] * 2,
        "SalesVolume": ["10", "20"],
    }).to_csv(p, index=False)
    df = load_data(str(p))
    assert list(df["Date"]) == [pd.Timestamp("2020-02-01"), pd.Timestamp("2020-03-13")]


def test_missing_file_is_load_error(tmp_path):
    with pytest.raises(DataLoaderError, match="not found"):
        load_data(str(tmp_path / "nope.csv"))


def test_missing_column_is_load_error(tmp_path):
    p = tmp_path / "hpi.csv"
    pd.DataFrame({"Date": ["01/01/2020"], "RegionName": ["United Kingdom"]}).to_csv(p, index=False)
    with pytest.raises(DataLoaderError, match="SalesVolume"):
        load_data(str(p))


@pytest.mark.parametrize("date, volume", [
    ("2020-13-45", "10"),   # not day/month/year
    ("01/01/2020", "abc"),
    ("01/01/2020", "-5"),
    ("01/01/2020", "2.5"),
])
def test_invalid_values_raise(tmp_path, date, volume):
    p = tmp_path / "bad.csv"
    pd.DataFrame({
        "Date": ["01/12/2019", date],
        "RegionName": ["United Kingdom"] * 2,
        "SalesVolume": ["10", volume],
    }).to_csv(p, index=False)
    with pytest.raises(DataLoaderError, match="Validation failed for 1 row"):
        load_data(str(p))


def test_bad_row_in_other_region_does_not_block(tmp_path):
    p = tmp_path / "hpi.csv"
    pd.DataFrame({
        "Date": ["01/01/2020", "01/02/2020", "01/01/2020"],
        "RegionName": ["United Kingdom", "United Kingdom", "Wales"],
        "SalesVolume": ["10", "20", "3.5"],
    }).to_csv(p, index=False)

    with pytest.raises(DataLoaderError, match=r"first 5\): \[2\]"):
        load_data(str(p))

    df = load_data(str(p), region="United Kingdom")
    assert list(df["SalesVolume"]) == [10, 20]
    assert (df["RegionName"] == "United Kingdom").all()
    table = select_region(df, "United Kingdom")
    assert len(table) == 2


def test_bad_row_in_selected_region_still_raises(tmp_path):
    p = tmp_path / "hpi.csv"
    pd.DataFrame({
        "Date": ["01/01/2020", "01/02/2020"],
        "RegionName": ["United Kingdom", "Wales"],
        "SalesVolume": ["-1", "20"],
    }).to_csv(p, index=False)
    with pytest.raises(DataLoaderError, match=r"first 5\): \[0\]"):
        load_data(str(p), region="United Kingdom")


def test_region_filter_with_no_match_is_empty_result(hpi_csv):
    df = load_data(str(hpi_csv), region="Atlantis")
    assert df.empty
    with pytest.raises(EmptyResultError, match="Atlantis"):
        select_region(df, "Atlantis")


def test_select_region_canonical_columns(hpi_csv):
    table = select_region(load_data(str(hpi_csv)), "United Kingdom")
    assert list(table.columns) == ["date", "region", "sales_volume"]
    assert (table["region"] == "United Kingdom").all()
    assert table["date"].is_monotonic_increasing
    assert table["date"].is_unique
    assert table["sales_volume"].isna().sum() == 2


def test_select_region_no_match_is_empty_result(hpi_csv):
    with pytest.raises(EmptyResultError, match="Atlantis"):
        select_region(load_data(str(hpi_csv)), "Atlantis")


def test_select_region_duplicate_dates(tmp_path):
    p = tmp_path / "dupes.csv"
    pd.DataFrame({
        "Date": ["01/01/2020", "01/01/2020"],
        "RegionName": ["United Kingdom"] * 2,
        "SalesVolume": ["10", "11"],
    }).to_csv(p, index=False)
    with pytest.raises(DataLoaderError, match="duplicate dates"):
        select_region(load_data(str(p)), "United Kingdom")


def test_drop_missing_target(make_table):
    table = make_table([1, None, 3])
    out = drop_missing_target(table)
    assert list(out["sales_volume"]) == [1, 3]
    # input untouched
    assert table["sales_volume"].isna().sum() == 1
