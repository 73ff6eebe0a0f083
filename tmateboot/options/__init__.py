"""Option schema, option trees and the environment snapshot."""
