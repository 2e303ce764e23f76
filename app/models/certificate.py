"""Certificate documents."""

CERTIFICATES_COLLECTION = "certificates"

# Demo records inserted by /api/seed-check and scripts/seed_certificates.py.
# The hash strings are opaque placeholders; nothing verifies them.
DEMO_CERTIFICATES = [
    {
        "certificate_id": "crt-88293-uuid",
        "student_name": "Rakesh Gajre",
        "student_appar_id": "APPAR-2023-992",
        "course_name": "Advanced Full-Stack Development",
        "grade": "A+",
        "issuer_name": "Tech Institute of India",
        "issue_date": "2023-10-15",
        "ipfs_cid": "QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco",
        "blockchain_tx": "0x7129038...8923",
        "is_valid": True,
    },
    {
        "certificate_id": "crt-99120-uuid",
        "student_name": "Rakesh Gajre",
        "student_appar_id": "APPAR-2023-992",
        "course_name": "Blockchain Fundamentals",
        "grade": "A",
        "issuer_name": "Polygon Academy",
        "issue_date": "2023-08-20",
        "ipfs_cid": "QmZ43...kLm2",
        "blockchain_tx": "0x82301...1120",
        "is_valid": True,
    },
]
