"""Shared ticket builders and fake collaborators for the tgsroast tests."""

from types import SimpleNamespace

import pytest
from pyasn1.codec.der import encoder
from pyasn1.type.univ import noValue

from impacket.krb5 import constants
from impacket.krb5.asn1 import AP_REQ, TGS_REP, KRB_CRED, Ticket as TicketAsn1

import tgsroast

REALM = "EXAMPLE.COM"
SPN = "HTTP/svcA.example.com"
# OID 1.2.840.113554.1.2.2 (Kerberos V5 GSS-API mechanism)
KRB5_OID = bytes.fromhex("06092a864886f712010202")


def der(tag, body):
    length = len(body)
    if length < 0x80:
        header = bytes([tag, length])
    elif length < 0x100:
        header = bytes([tag, 0x81, length])
    else:
        header = bytes([tag, 0x82]) + length.to_bytes(2, "big")
    return header + body


def fill_ticket(ticket, etype, cipher, spn=SPN, realm=REALM):
    ticket["tkt-vno"] = 5
    ticket["realm"] = realm
    ticket["sname"] = noValue
    ticket["sname"]["name-type"] = constants.PrincipalNameType.NT_SRV_INST.value
    ticket["sname"]["name-string"] = noValue
    for i, part in enumerate(spn.split("/")):
        ticket["sname"]["name-string"][i] = part
    ticket["enc-part"] = noValue
    ticket["enc-part"]["etype"] = etype
    ticket["enc-part"]["kvno"] = 2
    ticket["enc-part"]["cipher"] = cipher
    return ticket


def ticket_bytes(etype, cipher, spn=SPN):
    return encoder.encode(fill_ticket(TicketAsn1(), etype, cipher, spn))


def ap_req_bytes(etype, cipher, spn=SPN):
    ap_req = AP_REQ()
    ap_req["pvno"] = 5
    ap_req["msg-type"] = int(constants.ApplicationTagNumbers.AP_REQ.value)
    ap_req["ap-options"] = constants.encodeFlags([])
    ap_req["ticket"] = noValue
    fill_ticket(ap_req["ticket"], etype, cipher, spn)
    ap_req["authenticator"] = noValue
    ap_req["authenticator"]["etype"] = etype
    ap_req["authenticator"]["cipher"] = b"\xee" * 40
    return encoder.encode(ap_req)


def gss_bytes(etype, cipher, spn=SPN):
    return der(0x60, KRB5_OID + b"\x01\x00" + ap_req_bytes(etype, cipher, spn))


def tgs_rep_bytes(etype, cipher, spn=SPN):
    tgs_rep = TGS_REP()
    tgs_rep["pvno"] = 5
    tgs_rep["msg-type"] = int(constants.ApplicationTagNumbers.TGS_REP.value)
    tgs_rep["crealm"] = REALM
    tgs_rep["cname"] = noValue
    tgs_rep["cname"]["name-type"] = constants.PrincipalNameType.NT_PRINCIPAL.value
    tgs_rep["cname"]["name-string"] = noValue
    tgs_rep["cname"]["name-string"][0] = "lowpriv"
    tgs_rep["ticket"] = noValue
    fill_ticket(tgs_rep["ticket"], etype, cipher, spn)
    tgs_rep["enc-part"] = noValue
    tgs_rep["enc-part"]["etype"] = constants.EncryptionTypes.aes256_cts_hmac_sha1_96.value
    tgs_rep["enc-part"]["cipher"] = b"\xdd" * 48
    return encoder.encode(tgs_rep)


def krb_cred_bytes(etype, cipher, spn=SPN):
    cred = KRB_CRED()
    cred["pvno"] = 5
    cred["msg-type"] = int(constants.ApplicationTagNumbers.KRB_CRED.value)
    cred["tickets"] = noValue
    cred["tickets"][0] = noValue
    fill_ticket(cred["tickets"][0], etype, cipher, spn)
    cred["enc-part"] = noValue
    cred["enc-part"]["etype"] = 0
    cred["enc-part"]["cipher"] = b"\x00" * 8
    return encoder.encode(cred)


def hand_built_ticket(etype, cipher):
    """A Ticket written byte by byte, with whatever length forms the sizes need."""
    enc_part = der(0xa3, der(0x30, der(0xa0, der(0x02, bytes([etype])))
                                   + der(0xa1, der(0x02, b"\x02"))
                                   + der(0xa2, der(0x04, cipher))))
    sname = der(0xa2, der(0x30, der(0xa0, der(0x02, b"\x02"))
                                + der(0xa1, der(0x30, der(0x1b, b"HTTP") + der(0x1b, b"svcA.example.com")))))
    body = der(0xa0, der(0x02, b"\x05")) + der(0xa1, der(0x1b, REALM.encode())) + sname + enc_part
    return der(0x61, der(0x30, body))


class FakeAcquirer(tgsroast.TicketAcquirer):
    """Serves canned tickets; an Exception instance in the table is raised instead."""
    def __init__(self, tickets):
        self.tickets = tickets
        self.requested = []

    def acquire(self, spn):
        self.requested.append(spn)
        ticket = self.tickets.get(spn)
        if ticket is None:
            raise tgsroast.AcquireError("KDC_ERR_S_PRINCIPAL_UNKNOWN")
        if isinstance(ticket, Exception):
            raise ticket
        return ticket


class MapResolver(tgsroast.PrincipalResolver):
    def __init__(self, owners):
        self.owners = owners
        self.entered = 0
        self.exited = 0

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.exited += 1
        return False

    def resolve(self, spn):
        return self.owners.get(spn, tgsroast.UNKNOWN_PRINCIPAL)


def fake_ccache(tickets):
    """Stand-in for impacket's CCache keyed by SPN."""
    calls = []

    def getCredential(server, anySPN=True):
        calls.append((server, anySPN))
        if server not in tickets:
            return None
        return SimpleNamespace(ticket={"data" : tickets[server]})

    return SimpleNamespace(getCredential=getCredential, calls=calls)


@pytest.fixture
def rc4_cipher():
    # 16 byte checksum followed by confounder and encrypted EncTicketPart
    return bytes(range(16)) + bytes(range(0x80, 0x80 + 48))


@pytest.fixture
def aes_cipher():
    return b"\x42" * 60


@pytest.fixture
def rc4_ticket(rc4_cipher):
    return ticket_bytes(constants.EncryptionTypes.rc4_hmac.value, rc4_cipher)


@pytest.fixture
def aes_ticket(aes_cipher):
    return ticket_bytes(constants.EncryptionTypes.aes256_cts_hmac_sha1_96.value, aes_cipher)
