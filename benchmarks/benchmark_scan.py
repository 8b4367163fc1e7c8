"""Benchmark scanning throughput.

Run with:
    pytest benchmarks/benchmark_scan.py -v --benchmark-only
"""

try:
    import pytest

    from rulelex import Scanner, skip_if_matches, tokenize, tokenize_if_matches

    @pytest.mark.benchmark(group="scan")
    def test_benchmark_tokenize_large_program(benchmark, expression_rules, large_program):
        """Tokenize ~100KB through the module-level helper."""
        tokens = benchmark(tokenize, large_program, expression_rules)
        assert tokens

    @pytest.mark.benchmark(group="scan")
    def test_benchmark_scan_loop(benchmark, expression_rules, large_program):
        """Drive scan() by hand, reusing one scanner via reset()."""
        scanner = Scanner(large_program, expression_rules)

        def run():
            scanner.reset()
            count = 0
            while scanner.scan():
                count += 1
            return count

        assert benchmark(run) > 0

    @pytest.mark.benchmark(group="skip")
    def test_benchmark_byte_at_a_time_skips(benchmark, whitespace_heavy):
        """Long runs of one-byte skips exercise the skip loop."""
        rules = [skip_if_matches(r"\s"), tokenize_if_matches(r"x", "X")]
        tokens = benchmark(tokenize, whitespace_heavy, rules)
        assert len(tokens) == 20

    @pytest.mark.benchmark(group="skip")
    def test_benchmark_greedy_skips(benchmark, whitespace_heavy):
        """Same input with a greedy skip rule (baseline for ratio)."""
        rules = [skip_if_matches(r"\s+"), tokenize_if_matches(r"x", "X")]
        tokens = benchmark(tokenize, whitespace_heavy, rules)
        assert len(tokens) == 20

except ImportError:
    pass
