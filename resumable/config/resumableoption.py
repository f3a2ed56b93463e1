from resumable.config.config import OptionDescription, ChoiceOption, Config
from resumable import policy


resumable_optiondescription = OptionDescription("resumable",
    "Resumable computation options", [
    ChoiceOption("initial", "whether the computation pauses right after "
                 "it has been created, before any body code runs",
                 policy.SUSPENSION_POLICIES, policy.LAZY,
                 cmdline="--initial"),

    ChoiceOption("final", "whether the computation pauses after its body "
                 "finished, keeping its state readable until released",
                 policy.SUSPENSION_POLICIES, policy.LAZY,
                 cmdline="--final"),

    ChoiceOption("returns", "completion contract of the body",
                 policy.COMPLETION_CONTRACTS, policy.VOID,
                 requires={policy.VALUE: [("final", policy.LAZY)]},
                 cmdline="--returns"),

    ChoiceOption("errors", "what to do with an exception escaping the body: "
                 "keep it and re-raise it at the next pull, or drop it",
                 policy.ERROR_POLICIES, policy.CAPTURED,
                 cmdline="--errors"),
    ])


def get_resumable_config(overrides=None):
    """Return a new Config for a computation definition.

    'overrides' is a dict mapping option paths to values.  A value that
    conflicts with one required by another option raises ValueError.
    """
    config = Config(resumable_optiondescription)
    if overrides is not None:
        # 'returns' requires a value of 'final': apply it first, so that an
        # explicit conflicting 'final' is reported instead of overwritten
        for name in sorted(overrides, key=lambda name: name != 'returns'):
            subconfig, name_in_sub = config._get_by_path(name)
            setattr(subconfig, name_in_sub, overrides[name])
    return config
