from duplex.core.models import HashAlgorithmName

HASH_ALIASES = {
    "xxhash": HashAlgorithmName.XXHASH,
    "md5": HashAlgorithmName.MD5,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content hash used to confirm duplicates:\n"
    "  xxhash : fast 64-bit xxHash (default)\n"
    "  md5    : MD5, forced when --md5list is used\n"
)

DESCRIPTION = "Duplex — find duplicate files and delete them by rules"

EPILOG_TEXT = """
Positional arguments are equivalent to --rfolder options.

Examples:
  Review duplicates in two folders, with subfolders
  %(prog)s ~/Pictures /mnt/backup/Pictures

  Ignore files of 1KB and smaller, start with a rule marking everything under backup
  %(prog)s -r ~/Pictures -r /mnt/backup -s 1K -u "^/mnt/backup/"

  Delete marked files without the interactive review (simulate first)
  %(prog)s -r ~/Pictures -u "\\(1\\)\\.jpg$" --automatic --dry-run

  Combine a folder scan with digests produced earlier by md5deep -zr
  %(prog)s -r ~/Music -m music.md5
"""
