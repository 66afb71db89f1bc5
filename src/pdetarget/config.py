# /*******************************************************************************
# * Copyright (c) 16.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Configuration of the pde-target tool

Options can be given on the command line (--base-definition x.target) or
as Maven properties (-Dpde.target.baseDefinition=x.target). Command line
options win.

Created on Mar 16, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os.path
import argparse

from pdetarget.common import ConfigurationError, stripExtension
from pdetarget.target import APPEND, PLACEMENTS

DEFAULTS = {
    'baseDefinition': None,
    'outputFile': None,
    'buildDirectory': 'target',
    'excludeP2': True,
    'placement': APPEND,
    'createSourceBundles': True,
    'incremental': False,
    'dependencies': None,
    'pom': None,
    'localRepository': None,
    'includeScope': None,
    'excludeScope': None,
    'includeTypes': None,
    'excludeTypes': None,
    'includeClassifiers': None,
    'excludeClassifiers': None,
    'includeGroupIds': None,
    'excludeGroupIds': None,
    'includeArtifactIds': None,
    'excludeArtifactIds': None,
    'logFile': None,
    'verbose': False,
}

BOOLEAN_OPTIONS = frozenset(('excludeP2', 'createSourceBundles', 'incremental', 'verbose'))

# Maven property -> option
PROPERTIES = {
    'pde.target.outputFile': 'outputFile',
    'pde.target.baseDefinition': 'baseDefinition',
    'pde.target.excludeP2': 'excludeP2',
    'pde.target.placement': 'placement',
    'pde.target.createSourceBundles': 'createSourceBundles',
    'pde.target.incremental': 'incremental',
    'pde.target.dependencies': 'dependencies',
    'pde.target.pom': 'pom',
    'pde.target.logFile': 'logFile',
    'project.build.directory': 'buildDirectory',
    'maven.repo.local': 'localRepository',
    'includeScope': 'includeScope',
    'excludeScope': 'excludeScope',
    'includeTypes': 'includeTypes',
    'excludeTypes': 'excludeTypes',
    'includeClassifiers': 'includeClassifiers',
    'excludeClassifiers': 'excludeClassifiers',
    'includeGroupIds': 'includeGroupIds',
    'excludeGroupIds': 'excludeGroupIds',
    'includeArtifactIds': 'includeArtifactIds',
    'excludeArtifactIds': 'excludeArtifactIds',
}

def parseBoolean(value):
    if isinstance(value, bool):
        return value

    v = value.strip().lower()
    if v in ('true', 'yes', 'on', '1'):
        return True
    if v in ('false', 'no', 'off', '0'):
        return False

    raise ConfigurationError('Expected true or false but got [%s]' % value)

class Configuration(object):
    '''All the options of the tool'''
    def __init__(self, **options):
        for name, value in DEFAULTS.items():
            setattr(self, name, value)

        for name, value in options.items():
            self.set(name, value)

    def set(self, name, value):
        if name not in DEFAULTS:
            raise ConfigurationError('Unknown option %s' % name)

        if name in BOOLEAN_OPTIONS:
            value = parseBoolean(value)

        if name == 'placement' and value not in PLACEMENTS:
            raise ConfigurationError('Unknown placement %s; expected one of %s' % (value, ', '.join(PLACEMENTS)))

        setattr(self, name, value)

    def getOutputFile(self):
        '''The explicit output file or <buildDirectory>/<baseDefinition without extension>-pde.target'''
        if self.outputFile:
            return self.outputFile

        if not self.baseDefinition:
            raise ConfigurationError('Base target definition is not configured')

        name = stripExtension(os.path.basename(self.baseDefinition))

        # append "-pde" to the output definition and use .target extension
        return os.path.join(self.buildDirectory, '%s-pde.target' % name)

    def getLogFile(self):
        return self.logFile or '%s.log' % self.getOutputFile()

    def __repr__(self):
        items = ['%s=%r' % (name, getattr(self, name)) for name in sorted(DEFAULTS)]
        return 'Configuration(%s)' % ', '.join(items)

def createParser(name='pde-target', version=None):
    parser = argparse.ArgumentParser(
        prog=name,
        description='Add the Maven dependencies of a project as directory locations '
                    'to an Eclipse PDE target definition.',
    )
    if version:
        parser.add_argument('--version', action='version', version='%(prog)s ' + version)

    parser.add_argument('-D', dest='properties', action='append', default=[], metavar='NAME=VALUE',
        help='Set an option as Maven property, for example -Dpde.target.excludeP2=false')
    parser.add_argument('-b', '--base-definition', dest='baseDefinition',
        help='The base target definition which will be augmented with the dependencies (required)')
    parser.add_argument('-o', '--output-file', dest='outputFile',
        help='Where to write the new target definition (default: <build-directory>/<base>-pde.target)')
    parser.add_argument('--build-directory', dest='buildDirectory',
        help='The build output directory (default: target)')

    group = parser.add_mutually_exclusive_group()
    group.add_argument('--exclude-p2', dest='excludeP2', action='store_const', const=True,
        help='Exclude artifacts with group IDs starting with "p2." (default)')
    group.add_argument('--include-p2', dest='excludeP2', action='store_const', const=False,
        help='Keep artifacts with group IDs starting with "p2."')

    parser.add_argument('--placement', dest='placement', choices=PLACEMENTS,
        help='Add the new locations after (append, default) or before (prepend) the existing ones')

    group = parser.add_mutually_exclusive_group()
    group.add_argument('--source-bundles', dest='createSourceBundles', action='store_const', const=True,
        help='Create Eclipse source bundles from the sources JARs (default)')
    group.add_argument('--no-source-bundles', dest='createSourceBundles', action='store_const', const=False,
        help="Don't create source bundles")

    parser.add_argument('--incremental', dest='incremental', action='store_const', const=True,
        help='Only regenerate the target definition when the base definition is newer')

    parser.add_argument('-d', '--dependencies', dest='dependencies',
        help='Output file of "mvn dependency:list -DoutputAbsoluteArtifactFilename=true -DoutputFile=..."')
    parser.add_argument('-p', '--pom', dest='pom',
        help='Use the direct dependencies of this POM')
    parser.add_argument('--local-repository', dest='localRepository',
        help='The local Maven repository (default: ~/.m2/repository)')

    for option, dest, help in (
        ('--include-scope', 'includeScope', 'Scope to include (test, compile, runtime, provided, system)'),
        ('--exclude-scope', 'excludeScope', 'Scope to exclude (compile, runtime, provided, system)'),
        ('--include-types', 'includeTypes', 'Comma separated list of types to include'),
        ('--exclude-types', 'excludeTypes', 'Comma separated list of types to exclude'),
        ('--include-classifiers', 'includeClassifiers', 'Comma separated list of classifiers to include'),
        ('--exclude-classifiers', 'excludeClassifiers', 'Comma separated list of classifiers to exclude'),
        ('--include-group-ids', 'includeGroupIds', 'Comma separated list of group ID prefixes to include'),
        ('--exclude-group-ids', 'excludeGroupIds', 'Comma separated list of group ID prefixes to exclude'),
        ('--include-artifact-ids', 'includeArtifactIds', 'Comma separated list of artifact IDs to include'),
        ('--exclude-artifact-ids', 'excludeArtifactIds', 'Comma separated list of artifact IDs to exclude'),
    ):
        parser.add_argument(option, dest=dest, help=help)

    parser.add_argument('--log-file', dest='logFile',
        help='Log file (default: <output-file>.log)')
    parser.add_argument('-v', '--verbose', dest='verbose', action='store_const', const=True,
        help='Show debug output on the console')

    return parser

def parseProperty(value):
    pos = value.find('=')
    if pos <= 0:
        raise ConfigurationError('Expected -Dname=value but got -D%s' % value)
    return value[:pos], value[pos+1:]

def parseArguments(argv, name='pde-target', version=None):
    '''Create a Configuration from command line arguments'''
    args = createParser(name, version).parse_args(argv)

    config = Configuration()

    for item in args.properties:
        key, value = parseProperty(item)
        option = PROPERTIES.get(key)
        if option is None:
            raise ConfigurationError('Unknown property %s' % key)
        config.set(option, value)

    for option in DEFAULTS:
        value = getattr(args, option, None)
        if value is not None:
            config.set(option, value)

    return config
