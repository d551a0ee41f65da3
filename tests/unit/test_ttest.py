"""
Unit tests for t_test().
"""

import dataclasses

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from effectstats import t_test
from effectstats.analysis.statistics import COHENS_D, HEDGES_G
from effectstats.exceptions import (
    InsufficientDataError,
    TooManyGroupsError,
    ValidationError,
)


@pytest.fixture
def two_groups():
    """Two groups of five observations with means 3 and 8."""
    return pd.DataFrame({
        "value": np.arange(1, 11, dtype=float),
        "grp": ["g1"] * 5 + ["g2"] * 5,
    })


@pytest.fixture
def random_data():
    """Random data with a binary group, a second measure and weights."""
    rng = np.random.default_rng(42)
    n = 40
    return pd.DataFrame({
        "x": rng.normal(50, 10, n),
        "y": rng.normal(53, 12, n),
        "grp": np.repeat(["control", "treatment"], [18, 22]),
        "w": rng.uniform(0.5, 2.0, n),
    })


class TestTwoSample:
    """Tests for the two-sample (Welch) t-test."""

    def test_known_values(self, two_groups):
        """Shifted sequences give t = -5 with 8 degrees of freedom."""
        result = t_test(two_groups, "value", by="grp")

        assert result.statistic == pytest.approx(-5.0)
        assert result.df == pytest.approx(8.0)
        assert result.p_value == pytest.approx(2 * stats.t.sf(5.0, 8))
        assert result.effect_size_name == HEDGES_G
        assert result.effect_size == pytest.approx(-2.8546, abs=1e-3)
        assert result.method == "Welch Two Sample t-test"
        assert result.group_labels == ("g1", "g2")
        assert result.n_groups == (5, 5)
        assert result.means == (3.0, 8.0)
        assert result.data_name == "value by grp"
        assert not result.paired
        assert not result.one_sample

    def test_matches_scipy_welch(self, random_data):
        """Unweighted results equal scipy's Welch test."""
        result = t_test(random_data, "x", by="grp")
        control = random_data.loc[random_data["grp"] == "control", "x"]
        treatment = random_data.loc[random_data["grp"] == "treatment", "x"]
        expected = stats.ttest_ind(control, treatment, equal_var=False)

        assert result.statistic == pytest.approx(expected.statistic)
        assert result.p_value == pytest.approx(expected.pvalue)
        assert result.df == pytest.approx(expected.df)
        assert result.effect_size_name == COHENS_D

    def test_mu_shifts_difference(self, two_groups):
        """mu is the hypothesized difference in means."""
        result = t_test(two_groups, "value", by="grp", mu=-5)
        assert result.statistic == pytest.approx(0.0)
        assert result.mu == -5.0

    def test_wide_data(self):
        """Two variables are compared like two groups."""
        data = pd.DataFrame({"a": [1.0, 2.0, 3.0, 4.0, 5.0], "b": [6.0, 7.0, 8.0, 9.0, 10.0]})
        result = t_test(data, ["a", "b"])

        assert result.statistic == pytest.approx(-5.0)
        assert result.group_labels == ("a", "b")
        assert result.data_name == "a and b"

    def test_swapping_groups_flips_sign(self):
        """Reversing the variables flips t and the effect size only."""
        rng = np.random.default_rng(7)
        data = pd.DataFrame({"a": rng.normal(0, 1, 12), "b": rng.normal(1, 1, 12)})
        forward = t_test(data, ["a", "b"])
        backward = t_test(data, ["b", "a"])

        assert forward.statistic == pytest.approx(-backward.statistic)
        assert forward.effect_size == pytest.approx(-backward.effect_size)
        assert forward.p_value == pytest.approx(backward.p_value)
        assert forward.df == pytest.approx(backward.df)

    @pytest.mark.parametrize("alternative", ["less", "greater"])
    def test_one_sided(self, random_data, alternative):
        """One-sided p-values equal scipy's."""
        result = t_test(random_data, "x", by="grp", alternative=alternative)
        control = random_data.loc[random_data["grp"] == "control", "x"]
        treatment = random_data.loc[random_data["grp"] == "treatment", "x"]
        expected = stats.ttest_ind(control, treatment, equal_var=False, alternative=alternative)

        assert result.p_value == pytest.approx(expected.pvalue)
        assert result.alternative == alternative

    def test_too_many_groups(self):
        """A grouping variable with three levels is rejected."""
        data = pd.DataFrame({"x": np.arange(9, dtype=float), "g": list("abc") * 3})
        with pytest.raises(TooManyGroupsError, match="means_by_group"):
            t_test(data, "x", by="g")

    def test_group_with_one_observation(self):
        """Each group needs at least two observations."""
        data = pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0], "g": ["a", "a", "a", "b"]})
        with pytest.raises(InsufficientDataError, match="'b'"):
            t_test(data, "x", by="g")


class TestOneSampleAndPaired:
    """Tests for one-sample and paired t-tests."""

    def test_one_sample_matches_scipy(self, random_data):
        """One-sample test against mu equals scipy's."""
        result = t_test(random_data, "x", mu=48, alternative="greater")
        expected = stats.ttest_1samp(random_data["x"], popmean=48, alternative="greater")

        assert result.statistic == pytest.approx(expected.statistic)
        assert result.p_value == pytest.approx(expected.pvalue)
        assert result.method == "One Sample t-test"
        assert result.one_sample
        assert result.group_labels == ("x",)

    def test_missing_values_dropped(self):
        """df counts only complete observations."""
        data = pd.DataFrame({"x": [1.0, 2.0, 3.0, np.nan, 5.0, 6.0]})
        result = t_test(data, "x")
        assert result.df == pytest.approx(4.0)
        assert result.n_groups == (5,)

    def test_paired_equals_one_sample_on_difference(self, random_data):
        """A paired test is a one-sample test of the differences."""
        paired = t_test(random_data, ["x", "y"], paired=True)
        diff = pd.DataFrame({"d": random_data["x"] - random_data["y"]})
        one_sample = t_test(diff, "d")

        assert paired.statistic == pytest.approx(one_sample.statistic)
        assert paired.p_value == pytest.approx(one_sample.p_value)
        assert paired.df == pytest.approx(one_sample.df)
        assert paired.effect_size == pytest.approx(one_sample.effect_size)
        assert paired.method == "Paired t-test"
        assert paired.paired
        assert not paired.one_sample

    def test_paired_needs_two_variables(self, random_data):
        """paired=True requires two variables."""
        with pytest.raises(ValidationError, match="two variables"):
            t_test(random_data, "x", paired=True)

    def test_effect_size_boundary(self):
        """Hedges' g up to 20 observations, Cohen's d above."""
        rng = np.random.default_rng(0)
        small = pd.DataFrame({"x": rng.normal(1, 1, 20)})
        large = pd.DataFrame({"x": rng.normal(1, 1, 21)})

        assert t_test(small, "x").effect_size_name == HEDGES_G
        assert t_test(large, "x").effect_size_name == COHENS_D


class TestWeighted:
    """Tests for weighted t-tests."""

    def test_uniform_weights_two_sample(self, random_data):
        """Constant weights reproduce the unweighted two-sample test."""
        data = random_data.assign(w=2.0)
        weighted = t_test(data, "x", by="grp", weights="w")
        unweighted = t_test(data, "x", by="grp")

        assert weighted.statistic == pytest.approx(unweighted.statistic)
        assert weighted.p_value == pytest.approx(unweighted.p_value)
        assert weighted.df == pytest.approx(unweighted.df)
        assert weighted.effect_size == pytest.approx(unweighted.effect_size)
        assert weighted.weighted
        assert weighted.n_groups == (36, 44)
        assert weighted.method == "Two-Sample t-test"
        assert unweighted.method == "Welch Two Sample t-test"

    def test_uniform_weights_one_sample(self, random_data):
        """Constant weights reproduce the unweighted one-sample test."""
        data = random_data.assign(w=0.5)
        weighted = t_test(data, "x", weights="w", mu=45)
        unweighted = t_test(data, "x", mu=45)

        assert weighted.statistic == pytest.approx(unweighted.statistic)
        assert weighted.p_value == pytest.approx(unweighted.p_value)
        assert weighted.df == pytest.approx(unweighted.df)
        assert weighted.n_groups == (20,)

    def test_weighted_means(self, random_data):
        """Reported means are weighted means."""
        result = t_test(random_data, "x", by="grp", weights="w")
        control = random_data[random_data["grp"] == "control"]
        expected = np.average(control["x"], weights=control["w"])
        assert result.means[0] == pytest.approx(expected)

    def test_weights_change_result(self, random_data):
        """Unequal weights give a different statistic."""
        weighted = t_test(random_data, "x", by="grp", weights="w")
        unweighted = t_test(random_data, "x", by="grp")
        assert weighted.statistic != pytest.approx(unweighted.statistic)

    def test_one_sided_complement(self, random_data):
        """Weighted 'less' and 'greater' p-values sum to one."""
        less = t_test(random_data, "x", by="grp", weights="w", alternative="less")
        greater = t_test(random_data, "x", by="grp", weights="w", alternative="greater")
        assert less.p_value + greater.p_value == pytest.approx(1.0)

    def test_weighted_paired(self, random_data):
        """Weighted paired test uses the weighted differences."""
        result = t_test(random_data, ["x", "y"], paired=True, weights="w")
        assert result.paired
        assert result.df == pytest.approx(len(random_data) - 1)


class TestResultRecord:
    """Tests for the returned record."""

    def test_immutable(self, two_groups):
        """Results cannot be modified."""
        result = t_test(two_groups, "value", by="grp")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.statistic = 0.0

    def test_repeatable(self, two_groups):
        """Identical inputs give identical results."""
        first = t_test(two_groups, "value", by="grp")
        second = t_test(two_groups, "value", by="grp")
        assert first.to_dict() == second.to_dict()

    def test_accepts_mapping(self):
        """A dict of columns can be used as data."""
        result = t_test({"x": [1.0, 2.0, 3.0, 4.0]}, "x", mu=1)
        assert result.statistic == pytest.approx(1.5 / (np.std([1, 2, 3, 4], ddof=1) / 2))
