import json

import pytest
from fido2.utils import websafe_decode
from fido2.webauthn import (
    AttestationConveyancePreference,
    AuthenticatorAttachment,
    UserVerificationRequirement,
)

from webauthn_options import (
    AlgorithmRegistry,
    Configuration,
    CreationOptions,
    MissingCredentialId,
    MissingUser,
    UnknownAlgorithm,
    ValidationError,
    create_options,
)
from webauthn_options.entities import PublicKeyCredentialParameters

USER = {"id": "1", "name": "User", "display_name": "User Display"}


def _assert_no_none(value, path="$"):
    assert value is not None, f"{path} is None"
    if isinstance(value, dict):
        for key, item in value.items():
            _assert_no_none(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _assert_no_none(item, f"{path}[{index}]")


class _NoChallenges:
    def generate(self, length):
        raise AssertionError("challenge should not be generated")


@pytest.fixture
def creation_options(configuration):
    return CreationOptions(user=USER, configuration=configuration)


def test_has_a_challenge(creation_options):
    assert isinstance(creation_options.challenge, bytes)
    assert len(creation_options.challenge) == 32
    assert creation_options.challenge == creation_options.challenge


def test_challenge_differs_between_instances(configuration):
    challenges = {
        CreationOptions(user=USER, configuration=configuration).challenge
        for _ in range(50)
    }
    assert len(challenges) == 50


def test_challenge_is_read_only(creation_options):
    with pytest.raises(AttributeError):
        creation_options.challenge = b"0" * 32


def test_configured_challenge_length(pss_probe):
    configuration = Configuration(challenge_length=64)

    assert len(CreationOptions(user=USER, configuration=configuration).challenge) == 64


def test_explicit_challenge(configuration):
    options = CreationOptions(
        user=USER, challenge=b"1234567890123456", configuration=configuration
    )

    assert options.challenge == b"1234567890123456"
    assert options.to_wire()["challenge"] == "MTIzNDU2Nzg5MDEyMzQ1Ng"


def test_explicit_challenge_too_short(configuration):
    with pytest.raises(ValidationError):
        CreationOptions(user=USER, challenge=b"123456789012345", configuration=configuration)


@pytest.mark.parametrize(
    "pss_probe, expected",
    [(True, [-7, -37, -257]), (False, [-7, -257])],
    indirect=["pss_probe"],
)
def test_default_public_key_params(configuration, pss_probe, expected):
    options = CreationOptions(user=USER, configuration=configuration)

    assert options.pub_key_cred_params == [
        PublicKeyCredentialParameters(alg=alg) for alg in expected
    ]


@pytest.mark.parametrize(
    "pss_probe, expected",
    [(True, [-7, -37, -257, -65535]), (False, [-7, -257, -65535])],
    indirect=["pss_probe"],
)
def test_extra_configured_algorithm(configuration, pss_probe, expected):
    configuration.algorithms.append("RS1")
    options = CreationOptions(user=USER, configuration=configuration)

    assert [p.alg for p in options.pub_key_cred_params] == expected


def test_configuration_read_at_first_access(configuration, creation_options):
    configuration.algorithms.append("RS1")
    assert creation_options.pub_key_cred_params[-1].alg == -65535

    configuration.algorithms.append("EdDSA")
    assert creation_options.pub_key_cred_params[-1].alg == -65535


def test_configured_algorithms_are_deduplicated(pss_probe):
    configuration = Configuration(algorithms=["ES256", -7, "RS256", "ES256"])
    options = CreationOptions(user=USER, configuration=configuration)

    assert [p.alg for p in options.pub_key_cred_params] == [-7, -257]


def test_relying_party_name_defaults_to_nothing(creation_options):
    assert creation_options.rp.name is None
    assert "name" not in creation_options.to_wire()["rp"]


def test_configured_relying_party(pss_probe):
    configuration = Configuration(
        relying_party_name="Example Inc.", relying_party_id="example.com"
    )
    options = CreationOptions(user=USER, configuration=configuration)

    assert options.rp.name == "Example Inc."
    assert options.rp.id == "example.com"
    assert options.to_wire()["rp"] == {"id": "example.com", "name": "Example Inc."}


def test_explicit_relying_party_wins(pss_probe):
    configuration = Configuration(relying_party_name="Example Inc.")
    options = CreationOptions(
        user=USER, rp={"name": "Other"}, configuration=configuration
    )

    assert options.rp.name == "Other"


def test_user_info(creation_options):
    assert creation_options.user.id == "1"
    assert creation_options.user.name == "User"
    assert creation_options.user.display_name == "User Display"


def test_default_timeout(creation_options):
    assert creation_options.timeout == 120000


def test_configured_timeout(configuration):
    configuration.default_timeout_ms = 60000

    assert CreationOptions(user=USER, configuration=configuration).timeout == 60000


def test_unset_configured_timeout(configuration):
    configuration.default_timeout_ms = None

    assert CreationOptions(user=USER, configuration=configuration).timeout == 120000


@pytest.mark.parametrize("timeout", [0, -1, "100", True])
def test_invalid_timeout(configuration, timeout):
    with pytest.raises(ValidationError):
        CreationOptions(user=USER, timeout=timeout, configuration=configuration)


def test_minimal_wire_format(creation_options):
    wire = creation_options.to_wire()

    assert list(wire) == ["challenge", "rp", "user", "pubKeyCredParams", "timeout"]
    assert len(websafe_decode(wire["challenge"])) == 32
    assert wire["rp"] == {}
    assert wire["user"] == {"id": "1", "name": "User", "displayName": "User Display"}
    assert wire["pubKeyCredParams"] == [
        {"type": "public-key", "alg": p.alg}
        for p in creation_options.pub_key_cred_params
    ]
    assert wire["timeout"] == 120000
    _assert_no_none(wire)


def test_has_everything(configuration):
    options = CreationOptions(
        rp={"id": "rp-id", "name": "rp-name", "icon": "rp-icon-url"},
        user={
            "id": "user-id",
            "name": "user-name",
            "display_name": "user-display-name",
            "icon": "user-icon-url",
        },
        pub_key_cred_params=[{"type": "public-key", "alg": -7}],
        timeout=10_000,
        exclude_credentials=[
            {"type": "public-key", "id": "credential-id", "transports": ["usb", "nfc"]}
        ],
        authenticator_selection={
            "authenticator_attachment": "cross-platform",
            "resident_key": "required",
            "user_verification": "required",
        },
        attestation="direct",
        extensions={"whatever": "whatever"},
        configuration=configuration,
    )

    wire = options.to_wire()

    assert wire["rp"] == {"id": "rp-id", "name": "rp-name", "icon": "rp-icon-url"}
    assert wire["user"] == {
        "id": "user-id",
        "name": "user-name",
        "displayName": "user-display-name",
        "icon": "user-icon-url",
    }
    assert wire["pubKeyCredParams"] == [{"type": "public-key", "alg": -7}]
    assert wire["timeout"] == 10_000
    assert wire["excludeCredentials"] == [
        {"type": "public-key", "id": "credential-id", "transports": ["usb", "nfc"]}
    ]
    assert wire["authenticatorSelection"] == {
        "authenticatorAttachment": "cross-platform",
        "residentKey": "required",
        "userVerification": "required",
    }
    assert wire["attestation"] == "direct"
    assert wire["extensions"] == {"whatever": "whatever"}
    assert wire["challenge"]
    _assert_no_none(wire)


def test_exclude_shorthand(configuration):
    options = CreationOptions(user=USER, exclude="id", configuration=configuration)

    assert options.exclude == "id"
    assert options.to_wire()["excludeCredentials"] == [{"type": "public-key", "id": "id"}]


def test_exclude_shorthand_list(configuration):
    options = CreationOptions(
        user=USER, exclude=[b"\x01", "b"], configuration=configuration
    )

    assert options.to_wire()["excludeCredentials"] == [
        {"type": "public-key", "id": "AQ"},
        {"type": "public-key", "id": "b"},
    ]


def test_explicit_exclude_credentials_win(configuration):
    options = CreationOptions(
        user=USER,
        exclude="shorthand",
        exclude_credentials=[{"id": "explicit"}],
        configuration=configuration,
    )

    assert options.to_wire()["excludeCredentials"] == [
        {"type": "public-key", "id": "explicit"}
    ]


def test_explicit_empty_exclude_credentials_suppress_shorthand(configuration):
    options = CreationOptions(
        user=USER, exclude="shorthand", exclude_credentials=[], configuration=configuration
    )

    assert options.exclude_credentials == []
    assert options.to_wire()["excludeCredentials"] == []


def test_no_exclude_credentials(creation_options):
    assert creation_options.exclude_credentials is None
    assert "excludeCredentials" not in creation_options.to_wire()


def test_exclude_without_id_fails_on_first_read(configuration):
    options = CreationOptions(
        user=USER, exclude=[{"transports": ["usb"]}], configuration=configuration
    )

    with pytest.raises(MissingCredentialId):
        options.to_wire()


def test_explicit_exclude_without_id_fails_at_construction(configuration):
    with pytest.raises(MissingCredentialId):
        CreationOptions(
            user=USER,
            exclude_credentials=[{"transports": ["usb"]}],
            configuration=configuration,
        )


@pytest.mark.parametrize("algs", ["RS256", -257, ["RS256"], ["RS256", -257]])
def test_algs_shorthand(configuration, algs):
    options = CreationOptions(user=USER, algs=algs, configuration=configuration)

    assert options.algs == algs
    assert options.to_wire()["pubKeyCredParams"] == [{"type": "public-key", "alg": -257}]


def test_algs_shorthand_list_order(configuration):
    options = CreationOptions(
        user=USER, algs=["EdDSA", "ES256", -8], configuration=configuration
    )

    assert [p.alg for p in options.pub_key_cred_params] == [-8, -7]


def test_explicit_params_win_over_algs(configuration):
    options = CreationOptions(
        user=USER,
        algs="RS256",
        pub_key_cred_params=[{"alg": -7}],
        configuration=configuration,
    )

    assert options.to_wire()["pubKeyCredParams"] == [{"type": "public-key", "alg": -7}]


def test_unknown_algorithm(configuration):
    options = CreationOptions(user=USER, algs="XS256", configuration=configuration)

    with pytest.raises(UnknownAlgorithm):
        options.pub_key_cred_params
    with pytest.raises(UnknownAlgorithm):
        options.to_wire()


def test_custom_registry(configuration):
    registry = AlgorithmRegistry()
    registry.register("ESP256", -9)
    options = CreationOptions(
        user=USER, algs=["ESP256", "ES256"], registry=registry, configuration=configuration
    )

    assert [p.alg for p in options.pub_key_cred_params] == [-9, -7]


def test_shorthand_is_not_serialized(configuration):
    options = CreationOptions(
        user=USER, algs="ES256", exclude="id", configuration=configuration
    )
    wire = options.to_wire()

    for key in ("algs", "exclude", "exclude_credentials", "pub_key_cred_params"):
        assert key not in wire


def test_missing_user_fails_first(configuration):
    with pytest.raises(MissingUser):
        CreationOptions(configuration=configuration, challenge_generator=_NoChallenges())
    with pytest.raises(MissingUser):
        CreationOptions(user=None, algs="XS256", encoding="hex")


def test_missing_display_name(configuration):
    with pytest.raises(MissingUser) as exc_info:
        CreationOptions(user={"id": "id", "name": "name"}, configuration=configuration)
    assert exc_info.value.field == "display_name"


def test_binary_user_id(configuration):
    user = dict(USER, id=b"\xfb\xff\x00")

    assert CreationOptions(user=user, configuration=configuration).to_wire()["user"][
        "id"
    ] == "-_8A"
    assert CreationOptions(
        user=user, encoding="base64", configuration=configuration
    ).to_wire()["user"]["id"] == "+/8A"


def test_configured_encoding(pss_probe):
    configuration = Configuration(encoding="base64")
    options = CreationOptions(
        user=dict(USER, id=b"\xff"),
        challenge=b"\xff" * 16,
        configuration=configuration,
    )
    wire = options.to_wire()

    assert wire["user"]["id"] == "/w=="
    assert wire["challenge"] == "/////////////////////w=="


def test_invalid_encoding(configuration):
    with pytest.raises(ValidationError):
        CreationOptions(user=USER, encoding="hex", configuration=configuration)


def test_enum_values_are_rendered_as_strings(configuration):
    options = CreationOptions(
        user=USER,
        attestation=AttestationConveyancePreference.DIRECT,
        authenticator_selection={
            "authenticator_attachment": AuthenticatorAttachment.PLATFORM,
            "user_verification": UserVerificationRequirement.REQUIRED,
        },
        configuration=configuration,
    )
    wire = json.loads(options.to_json())

    assert wire["attestation"] == "direct"
    assert wire["authenticatorSelection"] == {
        "authenticatorAttachment": "platform",
        "userVerification": "required",
    }
    assert type(options.to_wire()["attestation"]) is str


def test_to_json_matches_to_wire(creation_options):
    assert json.loads(creation_options.to_json()) == creation_options.to_wire()


def test_derived_lists_are_owned(configuration):
    exclude_credentials = [{"id": "a"}]
    options = CreationOptions(
        user=USER, exclude_credentials=exclude_credentials, configuration=configuration
    )
    exclude_credentials.append({"id": "b"})
    options.to_wire()["excludeCredentials"].append("mutated")

    assert len(options.exclude_credentials) == 1
    assert len(options.to_wire()["excludeCredentials"]) == 1


def test_extensions_are_copied(configuration):
    extensions = {"credProps": True}
    options = CreationOptions(user=USER, extensions=extensions, configuration=configuration)
    extensions["credProps"] = False
    options.to_wire()["extensions"]["credProps"] = False

    assert options.to_wire()["extensions"] == {"credProps": True}


def test_create_options(pss_probe):
    options = create_options(user=USER, encoding="base64")

    assert isinstance(options, CreationOptions)
    assert options.encoding == "base64"
    assert create_options(user=USER).encoding == "base64url"


def test_registry_only_resolves_configured_algorithms():
    registry = AlgorithmRegistry(pss_probe=lambda: False)
    configuration = Configuration(algorithms=["ES256", "PS256", "RS256"])
    options = CreationOptions(user=USER, registry=registry, configuration=configuration)

    assert [p.alg for p in options.pub_key_cred_params] == [-7, -37, -257]


def test_configuration_from_registry_defaults():
    registry = AlgorithmRegistry(pss_probe=lambda: False)
    configuration = Configuration(algorithms=registry.default_names())
    options = CreationOptions(user=USER, registry=registry, configuration=configuration)

    assert [p.alg for p in options.pub_key_cred_params] == [-7, -257]
