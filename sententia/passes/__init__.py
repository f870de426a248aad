# Heuristic passes, grouped by the tier they run in.

from sententia.passes.closed_class import (
    apply_sole_reading, apply_copula, apply_infinitive, apply_enclitic,
)
from sententia.passes.preposition import (
    apply_preposition_identification, apply_preposition_inference,
    apply_prepositional_object, apply_prepositional_brackets, apply_preposition_before_case,
)
from sententia.passes.genitive import apply_genitive
from sententia.passes.agreement import (
    apply_adjective_case, apply_adjective_noun, apply_adjacent, apply_adjective_agreement,
    apply_apposition, apply_participle_modifier, apply_participle_brace,
)
from sententia.passes.subject import apply_nominative_chunk, apply_clause_subjects
from sententia.passes.constructions import (
    apply_relative_pronoun, apply_dative_object, apply_accusative_infinitive,
    apply_temporal_clause, apply_comparative, apply_ablative_means, apply_ablative_agent,
    apply_ablative_absolute, apply_linking_verb, apply_complementary_infinitive,
    apply_vocative, apply_purpose_clause,
)

__all__ = [
    'apply_sole_reading', 'apply_copula', 'apply_infinitive', 'apply_enclitic',
    'apply_preposition_identification', 'apply_preposition_inference',
    'apply_prepositional_object', 'apply_prepositional_brackets', 'apply_preposition_before_case',
    'apply_genitive',
    'apply_adjective_case', 'apply_adjective_noun', 'apply_adjacent', 'apply_adjective_agreement',
    'apply_apposition', 'apply_participle_modifier', 'apply_participle_brace',
    'apply_nominative_chunk', 'apply_clause_subjects',
    'apply_relative_pronoun', 'apply_dative_object', 'apply_accusative_infinitive',
    'apply_temporal_clause', 'apply_comparative', 'apply_ablative_means', 'apply_ablative_agent',
    'apply_ablative_absolute', 'apply_linking_verb', 'apply_complementary_infinitive',
    'apply_vocative', 'apply_purpose_clause',
]
