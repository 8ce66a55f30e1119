"""Tests for the term ordering, rewriting and the pruning oracle."""

from lawfinder.catalogue import TRUE_TERM, declare_function, declare_predicate
from lawfinder.claims import App, Equation, Property, Var, term_size, unit_property
from lawfinder.pruning import (
    Normaliser,
    PruningConfig,
    RewritingPruner,
    RuleSet,
    canonical_pair,
    critical_pairs,
    is_skolem,
    kbo_greater,
    match_term,
    rules_for,
    skolem,
    unify,
)
from lawfinder.universe.types import BOOL, INT, arrow, list_of

INTS = list_of(INT)
NIL = declare_function("[]", INTS, [])
APPEND = declare_function("++", arrow(INTS, INTS, INTS), None)
REV = declare_function("reverse", arrow(INTS, INTS), None)
PLUS = declare_function("+", arrow(INT, INT, INT), None)
ZERO = declare_function("0", INT, 0)
ONE = declare_function("1", INT, 1)
TIMES = declare_function("*", arrow(INT, INT, INT), None)

XS, YS, ZS = Var(INTS, 0), Var(INTS, 1), Var(INTS, 2)
X, Y, Z = Var(INT, 0), Var(INT, 1), Var(INT, 2)


def app(f, *args):
    return App(f, tuple(args))


def law(lhs, rhs):
    return unit_property(Equation(lhs, rhs))


class TestOrdering:
    """Tests for the Knuth-Bendix ordering."""

    def test_bigger_term_is_greater(self):
        assert kbo_greater(app(REV, app(REV, XS)), XS)
        assert not kbo_greater(XS, app(REV, app(REV, XS)))

    def test_variable_condition(self):
        # xs ++ ys and ys cannot be compared the other way round
        assert kbo_greater(app(APPEND, XS, YS), YS)
        assert not kbo_greater(app(REV, XS), app(REV, YS))

    def test_commutativity_not_orientable(self):
        lhs, rhs = app(PLUS, X, Y), app(PLUS, Y, X)
        assert not kbo_greater(lhs, rhs)
        assert not kbo_greater(rhs, lhs)

    def test_associativity_orients_left_to_right(self):
        left = app(APPEND, app(APPEND, XS, YS), ZS)
        right = app(APPEND, XS, app(APPEND, YS, ZS))
        assert kbo_greater(left, right)

    def test_total_on_ground_terms(self):
        a, b = app(skolem(X)), app(skolem(Y))
        assert kbo_greater(app(PLUS, b, a), app(PLUS, a, b))
        assert is_skolem(skolem(X))
        assert not is_skolem(PLUS)


class TestRewriting:
    """Tests for rules and normalisation."""

    def test_match_term(self):
        sub = match_term(app(APPEND, XS, app(NIL)), app(APPEND, app(REV, YS), app(NIL)))
        assert sub == {XS: app(REV, YS)}
        assert match_term(app(APPEND, XS, XS), app(APPEND, YS, ZS)) is None

    def test_match_term_checks_types(self):
        assert match_term(X, XS) is None

    def test_rules_for_orientable(self):
        (rule,) = rules_for(XS, app(APPEND, XS, app(NIL)))
        assert rule.lhs == app(APPEND, XS, app(NIL))
        assert rule.oriented

    def test_rules_for_commutativity(self):
        rules = rules_for(app(PLUS, X, Y), app(PLUS, Y, X))
        assert len(rules) == 2
        assert not any(r.oriented for r in rules)

    def test_ordered_rewriting_terminates(self):
        rules = RuleSet()
        for rule in rules_for(app(PLUS, X, Y), app(PLUS, Y, X)):
            rules.add(rule)
        a, b = app(skolem(X)), app(skolem(Y))
        normaliser = Normaliser([rules])
        assert normaliser.normalise(app(PLUS, a, b)) == normaliser.normalise(app(PLUS, b, a))


class TestRewritingPruner:
    """Tests for the pruning oracle."""

    def test_renamed_law_is_redundant(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(REV, app(REV, XS)), XS))
        assert pruner.is_redundant(law(app(REV, app(REV, YS)), YS))

    def test_instance_is_redundant(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(APPEND, XS, app(NIL)), XS))
        assert pruner.is_redundant(law(app(APPEND, app(REV, XS), app(NIL)), app(REV, XS)))

    def test_independent_law_is_not_redundant(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(APPEND, XS, app(NIL)), XS))
        assert not pruner.is_redundant(law(app(APPEND, app(NIL), XS), XS))

    def test_commutativity_prunes_swapped_instances(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        assert pruner.is_redundant(law(app(PLUS, Z, X), app(PLUS, X, Z)))
        assert pruner.is_redundant(law(app(PLUS, X, app(ZERO)), app(PLUS, app(ZERO), X)))

    def test_associativity_and_commutativity(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, app(PLUS, X, Y), Z), app(PLUS, X, app(PLUS, Y, Z))))
        assert pruner.is_redundant(law(app(PLUS, app(PLUS, Y, X), Z), app(PLUS, X, app(PLUS, Y, Z))))

    def test_reducible(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(REV, app(REV, XS)), XS))
        assert pruner.is_reducible(app(APPEND, app(REV, app(REV, XS)), YS))
        assert not pruner.is_reducible(app(REV, XS))

    def test_budget_gives_conservative_answer(self):
        pruner = RewritingPruner(PruningConfig(max_rewrite_steps=0))
        pruner.record_fact(law(app(REV, app(REV, XS)), XS))
        assert not pruner.is_redundant(law(app(REV, app(REV, YS)), YS))
        # Exact matches need no rewriting
        assert pruner.is_redundant(law(app(REV, app(REV, XS)), XS))

    def test_large_facts_not_used_for_rewriting(self):
        pruner = RewritingPruner(PruningConfig(max_term_size=2))
        pruner.record_fact(law(app(REV, app(REV, XS)), XS))
        assert pruner.fact_count == 1
        assert pruner.rule_count == 0

    def test_conditional_law_uses_hypotheses(self):
        decl = declare_predicate("nonneg", arrow(INT, BOOL), lambda x: x >= 0)
        nonneg = decl.predicate
        abs_ = declare_function("abs", arrow(INT, INT), abs)
        pruner = RewritingPruner()
        hyp = Equation(app(nonneg, X), TRUE_TERM)
        pruner.record_fact(Property((hyp,), Equation(app(abs_, X), X)))
        assert pruner.fact_count == 1
        assert pruner.is_redundant(Property((hyp,), Equation(app(abs_, X), X)))
        # Hypotheses become rules: from x = 0, abs x = abs 0
        zero_hyp = Equation(X, app(ZERO))
        assert pruner.is_redundant(Property((zero_hyp,), Equation(app(abs_, X), app(abs_, app(ZERO)))))

    def test_clear(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(REV, app(REV, XS)), XS))
        pruner.clear()
        assert pruner.fact_count == 0
        assert not pruner.is_redundant(law(app(REV, app(REV, XS)), XS))


class TestCompletion:
    """Tests for unification, critical pairs and completion of the rules."""

    def test_unify(self):
        assert unify(app(PLUS, X, app(ZERO)), app(PLUS, app(ZERO), Y)) == {X: app(ZERO), Y: app(ZERO)}
        assert unify(app(PLUS, X, X), app(PLUS, app(ZERO), app(ONE))) is None

    def test_unify_checks_types_and_occurrences(self):
        assert unify(X, XS) is None
        assert unify(XS, app(REV, XS)) is None

    def test_critical_pair_of_unit_and_commutativity(self):
        (unit,) = rules_for(app(PLUS, X, app(ZERO)), X)
        commute = rules_for(app(PLUS, X, Y), app(PLUS, Y, X))[0]
        (pair,) = critical_pairs(unit, commute)
        assert canonical_pair(*pair) == (X, app(PLUS, app(ZERO), X))

    def test_trivial_self_overlaps_are_dropped(self):
        (rule,) = rules_for(app(REV, app(REV, XS)), XS)
        assert critical_pairs(rule, rule) == []

    def test_unit_on_the_other_side_follows(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, X, app(ZERO)), X))
        assert pruner.is_reducible(app(PLUS, app(ZERO), X))
        assert pruner.is_redundant(law(app(PLUS, app(ZERO), app(ONE)), app(ONE)))
        product = app(TIMES, X, Y)
        assert pruner.is_redundant(law(app(PLUS, app(ZERO), product), product))

    def test_unit_of_multiplication_under_sums(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(TIMES, X, Y), app(TIMES, Y, X)))
        pruner.record_fact(law(app(TIMES, X, app(ONE)), X))
        total = app(PLUS, X, Y)
        assert pruner.is_redundant(law(app(TIMES, app(ONE), total), total))

    def test_left_commutativity_follows(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, app(PLUS, X, Y), Z), app(PLUS, X, app(PLUS, Y, Z))))
        assert pruner.is_redundant(law(app(PLUS, X, app(PLUS, Y, Z)), app(PLUS, Y, app(PLUS, X, Z))))
        assert pruner.is_redundant(law(app(PLUS, app(PLUS, Z, Y), X), app(PLUS, X, app(PLUS, Y, Z))))
        assert any(rule.depth == 1 for rule in pruner.rules)
        assert pruner.fact_count == 2

    def test_depth_limit(self):
        pruner = RewritingPruner(PruningConfig(max_cp_depth=1))
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, app(PLUS, X, Y), Z), app(PLUS, X, app(PLUS, Y, Z))))
        assert all(rule.depth <= 1 for rule in pruner.rules)
        assert pruner.is_redundant(law(app(PLUS, app(PLUS, Y, X), Z), app(PLUS, X, app(PLUS, Y, Z))))

    def test_size_limit(self):
        pruner = RewritingPruner(PruningConfig(max_term_size=5))
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, app(PLUS, X, Y), Z), app(PLUS, X, app(PLUS, Y, Z))))
        assert all(max(term_size(r.lhs), term_size(r.rhs)) <= 5 for r in pruner.rules)

    def test_independent_law_still_not_redundant(self):
        pruner = RewritingPruner()
        pruner.record_fact(law(app(PLUS, X, Y), app(PLUS, Y, X)))
        pruner.record_fact(law(app(PLUS, X, app(ZERO)), X))
        assert not pruner.is_redundant(law(app(TIMES, X, app(ZERO)), app(ZERO)))
        assert not pruner.is_redundant(law(app(PLUS, X, X), app(TIMES, X, X)))
