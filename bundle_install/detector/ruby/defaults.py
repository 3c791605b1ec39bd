"""Well-known file and dependency names for Ruby detection."""

GEMFILE = "Gemfile"
RUBY_VERSION_FILE = ".ruby-version"

# Build plan entry names
GEMS_DEPENDENCY = "gems"
BUNDLER_DEPENDENCY = "bundler"
MRI_DEPENDENCY = "mri"
