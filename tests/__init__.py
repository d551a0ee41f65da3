"""
Test suite for the effectstats package.

This package contains unit tests and integration tests for:
- Input validation and reshaping
- t-tests and Mann-Whitney tests (weighted and unweighted)
- Effect sizes and ANOVA statistics
- Result records and reporting
"""
