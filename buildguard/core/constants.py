"""
Constants
Centralised storage for the fixed identifiers every verification routine
matches against: the warning token, the recognised factory keys, and the
conventional source layout.
"""
# Javadoc / javac diagnostics carry this token, surrounding spaces included.
WARNING_TOKEN = " warning: "

BOOTSTRAP_CONFIGURATION_KEY = "org.springframework.cloud.bootstrap.BootstrapConfiguration"
AUTO_CONFIGURATION_KEY = "org.springframework.boot.autoconfigure.EnableAutoConfiguration"

# Processing order matters: the bootstrap key is always checked first.
RECOGNIZED_FACTORY_KEYS = (BOOTSTRAP_CONFIGURATION_KEY, AUTO_CONFIGURATION_KEY)

JAVA_SOURCE_DIR = ("src", "main", "java")
JAVA_SOURCE_EXTENSION = ".java"

DEFAULT_SPOTBUGS_REPORT = "build/reports/spotbugs/main.xml"
DEFAULT_FACTORIES_FILE = "src/main/resources/META-INF/spring.factories"
DEFAULT_CLEAN_PATTERNS = ["*.log", "*.gz", "*.log.gz"]

SETTINGS_FILE_NAME = "buildguard.yml"
